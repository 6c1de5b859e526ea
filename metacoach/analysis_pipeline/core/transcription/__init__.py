from .transcriber import Transcriber

__all__ = ["Transcriber"]
