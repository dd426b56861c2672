"""
Match-expression builder for FTS5 queries.

Turns a segmented query into an FTS5 MATCH expression. Each token becomes
a quoted string, so characters with special meaning in FTS5 cannot break
the syntax, and tokens are implicitly AND-ed.
"""

import re
from typing import Iterable, List

from ..core import get_logger

logger = get_logger(__name__)


WORD_CHAR_PATTERN = re.compile(r"[^\W_]")


class QueryParser:
    """
    Builds FTS5 match expressions from token sequences.

    Tokens without a single word character (punctuation such as 。 or 「)
    are dropped: the FTS5 tokenizer discards them from the index too.
    """

    def searchable_tokens(self, tokens: Iterable[str]) -> List[str]:
        """
        Filter out tokens that can never match.

        Args:
            tokens: Segmented query tokens.

        Returns:
            Tokens holding at least one word character, in input order.
        """
        return [token for token in tokens if WORD_CHAR_PATTERN.search(token)]

    def build_match(self, tokens: Iterable[str]) -> str:
        """
        Build the MATCH expression for a token sequence.

        Args:
            tokens: Segmented query tokens.

        Returns:
            Space-joined quoted tokens, or "" when nothing is searchable.
        """
        terms = [self.quote(token) for token in self.searchable_tokens(tokens)]
        return " ".join(terms)

    @staticmethod
    def quote(token: str) -> str:
        """Quote a token as an FTS5 string, doubling embedded quotes."""
        return '"' + token.replace('"', '""') + '"'


if __name__ == "__main__":
    parser = QueryParser()

    test_tokens = [
        ["猫", "で", "ある"],
        ["「", "坊っちゃん", "」"],
        ['say"', "AND", "*"],
        ["。", "、"],
    ]

    for tokens in test_tokens:
        print(f"  {tokens} -> {parser.build_match(tokens)!r}")
