"""File name <-> constant name conversion.

Follows the Rails autoloading convention: ``users_controller.rb`` defines
``UsersController`` and ``billing/`` holds the ``Billing`` namespace.

Edge cases:

- Each underscore-separated word is capitalized and the rest of the word
  lowercased (``fooBar`` -> ``Foobar``), as Ruby's ``String#capitalize``.
- Runs of underscores, and leading or trailing underscores, produce no
  empty words: ``a__b`` -> ``AB``. Such names do not round-trip.
- Acronyms apply per word: with ``HTML`` registered, ``html_parser`` ->
  ``HTMLParser`` and back.
- Digits stay attached to the preceding word: ``v2_api`` -> ``V2Api``.
- Overrides map a whole basename and win over everything else.

For canonical basenames (lowercase words joined by single underscores)
``underscore(camelize(name)) == name``.
"""

from __future__ import annotations

import re


class Inflector:
    """Converts between basenames and constant names."""

    def __init__(
        self,
        acronyms: list[str] | None = None,
        overrides: dict[str, str] | None = None,
    ) -> None:
        self._acronyms = {a.lower(): a for a in acronyms or []}
        self._overrides = dict(overrides or {})
        self._reverse_overrides = {v: k for k, v in self._overrides.items()}

        self._acronym_re: re.Pattern[str] | None = None
        if self._acronyms:
            # Longest first so that "HTML5" wins over "HTML"
            alternation = "|".join(
                re.escape(a)
                for a in sorted(self._acronyms.values(), key=len, reverse=True)
            )
            self._acronym_re = re.compile(
                rf"(?:(?<=([A-Za-z\d]))|\b)({alternation})(?=\b|[^a-z])"
            )

    def camelize(self, basename: str) -> str:
        """Convert a file or directory basename into a constant name."""
        if basename in self._overrides:
            return self._overrides[basename]
        return "".join(
            self._acronyms.get(word, word.capitalize())
            for word in basename.split("_")
            if word
        )

    def underscore(self, constant_name: str) -> str:
        """Convert a constant name into the basename that defines it."""
        if constant_name in self._reverse_overrides:
            return self._reverse_overrides[constant_name]

        word = constant_name
        if self._acronym_re is not None:
            word = self._acronym_re.sub(
                lambda m: ("_" if m.group(1) else "") + m.group(2).lower(), word
            )
        word = re.sub(r"([A-Z\d]+)([A-Z][a-z])", r"\1_\2", word)
        word = re.sub(r"([a-z\d])([A-Z])", r"\1_\2", word)
        return word.lower()
