from .custom import CustomProvider
from .openai import OpenAIProvider

__all__ = ["CustomProvider", "OpenAIProvider"]
