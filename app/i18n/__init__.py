from .core import DEFAULT_LANG, LANGUAGES, load_lang, t, translate, translator

__all__ = ["DEFAULT_LANG", "LANGUAGES", "load_lang", "t", "translate", "translator"]
