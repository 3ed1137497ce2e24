from .engine import SpeechRecognitionEngine

__all__ = ["SpeechRecognitionEngine"]
