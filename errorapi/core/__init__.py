"""Foundation layer: errors, config, logging, redaction and HTTP."""
