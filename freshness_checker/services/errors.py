class AIResponseError(Exception):
    """The model replied with something that could not be used."""


class AINotConfiguredError(RuntimeError):
    """No API key is set for a model provider."""
