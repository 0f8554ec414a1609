from .inputs import resolve_credential, validate_audit_inputs

__all__ = ["resolve_credential", "validate_audit_inputs"]
