from __future__ import annotations

import logging
from typing import Callable, Optional

from ..config import DEFAULT_SUDACHI_DICT
from ..errors import TokenizationError

__all__ = ["BaseForm", "SudachiBaseForm"]

logger = logging.getLogger(__name__)

BaseForm = Callable[[str], str]


class SudachiBaseForm:
    """
    Reduce an inflected word to its dictionary form with Sudachi.

    The tokenizer is built on first use from the configured system
    dictionary (a name such as "core" or a path to a `.dic` file).
    """

    def __init__(self, dictionary: str = DEFAULT_SUDACHI_DICT):
        self.dictionary = dictionary
        self._tokenizer = None

    def _get_tokenizer(self):
        if self._tokenizer is None:
            try:
                from sudachipy import Dictionary, SplitMode

                self._tokenizer = Dictionary(dict=self.dictionary).create(mode=SplitMode.C)
            except Exception as exc:
                raise TokenizationError(
                    f"Could not load Sudachi dictionary {self.dictionary!r}: {exc}"
                ) from exc
            logger.debug("Sudachi tokenizer ready (dictionary=%s)", self.dictionary)
        return self._tokenizer

    def __call__(self, text: str) -> str:
        tokenizer = self._get_tokenizer()
        try:
            morphemes = tokenizer.tokenize(text)
        except Exception as exc:
            raise TokenizationError(f"Could not tokenize {text!r}: {exc}") from exc
        if len(morphemes) == 0:
            return text
        base: Optional[str] = morphemes[0].dictionary_form()
        return base or text
