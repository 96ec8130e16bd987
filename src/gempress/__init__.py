"""gempress: publish a Gemini capsule from gemtext posts with YAML metadata."""

__version__ = "0.4.0"
