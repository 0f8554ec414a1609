"""Code shared by the auditor core and its entry points."""
