"""
Japanese word segmentation with MeCab.

Japanese text has no whitespace between words, so the index is built on
the surface forms MeCab splits out (wakati-gaki). The space-joined token
sequence is the literal value stored in the FTS5 table, and queries are
segmented the same way so both sides agree on token boundaries.
"""

from typing import List

import MeCab

from ..core import get_config, get_logger, TokenizerError

logger = get_logger(__name__)


class Tokenizer:
    """
    Morphological segmenter backed by a MeCab tagger.

    The tagger runs in wakati mode: one line of output with surface forms
    separated by spaces, no BOS/EOS markers. Output is deterministic for
    a given dictionary.
    """

    def __init__(self, mecab_args: str = None):
        """
        Initialize the tagger.

        Args:
            mecab_args: MeCab command-line arguments. Defaults to config
                        value ("-Owakati"). The dictionary is picked up
                        from the installed unidic-lite package.

        Raises:
            TokenizerError: If MeCab cannot load a dictionary.
        """
        if mecab_args is None:
            mecab_args = get_config().tokenizer.mecab_args

        self.mecab_args = mecab_args

        try:
            self._tagger = MeCab.Tagger(mecab_args)
        except RuntimeError as e:
            raise TokenizerError(
                f"Failed to initialize MeCab: {e}",
                {"mecab_args": mecab_args}
            )

        logger.debug(f"MeCab tagger ready (args={mecab_args!r})")

    def segment(self, text: str) -> List[str]:
        """
        Split text into word tokens.

        Args:
            text: Text to segment.

        Returns:
            Surface forms in input order. Whitespace never becomes a token.
        """
        tokens: List[str] = []

        for line in text.splitlines():
            if not line.strip():
                continue
            tokens.extend(self._tagger.parse(line).split())

        return tokens

    def wakati(self, text: str) -> str:
        """Segment text and join the tokens with single spaces."""
        return " ".join(self.segment(text))


if __name__ == "__main__":
    tokenizer = Tokenizer("-Owakati")

    samples = [
        "すもももももももものうち",
        "吾輩は猫である。名前はまだ無い。",
    ]

    for sample in samples:
        print(f"{sample} -> {tokenizer.segment(sample)}")
