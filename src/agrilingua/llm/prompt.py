from collections.abc import Mapping


class TokenDict(dict):
    """Dict where missing tokens render as an empty string.

    Optional sections of a prompt (such as retrieved documentation) can then
    be left out simply by not passing their token.
    """

    def __missing__(self, key):
        return ""


class Prompt(str):
    """
    A prompt template whose ``{token}`` placeholders are filled on render.

    Usage:
        Prompt("Hello {name}", name="Amina") -> str() -> "Hello Amina"
    """

    _tokens: dict[str, object]

    def __new__(cls, text: str, /, **tokens):
        obj = super().__new__(cls, text)
        obj._tokens = dict(tokens)
        return obj

    def with_tokens(self, **tokens) -> "Prompt":
        """Return a new Prompt with additional/overridden tokens."""
        merged = {**self._tokens, **tokens}
        return Prompt(super().__str__(), **merged)

    def render(self, **extra_tokens) -> str:
        tokens = {**self._tokens, **extra_tokens}
        return super().__str__().format_map(TokenDict(tokens)).strip()

    def __str__(self) -> str:
        return self.render()

    def __eq__(self, other):
        if isinstance(other, str):
            return str(self) == other

        return super().__eq__(other)

    def __hash__(self):
        return super().__hash__()


class LocalizedPrompt:
    """A family of prompts keyed by language, with a default language used
    for anything that has no translation."""

    def __init__(self, prompts: Mapping[str, str], *, default_language: str):
        if default_language not in prompts:
            raise ValueError(
                f"Default language '{default_language}' has no prompt text"
            )
        self.prompts = {
            language: text if isinstance(text, Prompt) else Prompt(text)
            for language, text in prompts.items()
        }
        self.default_language = default_language

    @property
    def languages(self) -> list[str]:
        return list(self.prompts)

    def get(self, language: str | None) -> Prompt:
        language = (language or "").strip().lower()
        return self.prompts.get(language, self.prompts[self.default_language])

    def render(self, language: str | None, **tokens) -> str:
        return self.get(language).render(**tokens)
