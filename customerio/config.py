DEFAULT_TIMEOUT_MS = 10000

# Recognized per-request options; merged under every options record.
DEFAULTS = {"timeout": DEFAULT_TIMEOUT_MS}
