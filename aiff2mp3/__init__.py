"AIFF to MP3 batch converter with per-folder sidecar tags."

__version__ = "0.1.0"

__all__ = ["__version__"]
