"""
Rescriber keyboard redaction pipeline.

Captures the message typed into the host text field, sends it to the
redaction service and swaps in the redacted text:
- Redaction client (blocking and async forms)
- Request coordinator with single-flight triggering
- Text capture & replace adapter over the host connection
"""

__version__ = "1.0.0"
