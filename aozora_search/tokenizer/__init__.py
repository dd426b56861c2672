"""
Tokenizer module providing morphological segmentation of Japanese text.
"""

from .mecab_tokenizer import Tokenizer

__all__ = [
    "Tokenizer"
]
