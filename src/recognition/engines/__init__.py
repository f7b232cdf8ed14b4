from .base import RecognitionEngine
from .seshat_cli import SeshatCliEngine

__all__ = ["RecognitionEngine", "SeshatCliEngine"]
