# src/dtoshield/errors.py


class DtoshieldError(Exception):
    """Base class for errors that stop a batch run."""


class MissingCredentialError(DtoshieldError):
    def __init__(self, env_var: str):
        self.env_var = env_var
        super().__init__(f"{env_var} environment variable not set")


class UnknownModelError(DtoshieldError, ValueError):
    def __init__(self, model: str, known):
        self.model = model
        super().__init__(f"Unknown model '{model}'. Available: {', '.join(sorted(known))}")


class UnknownRecipeError(DtoshieldError, ValueError):
    def __init__(self, name: str, known):
        self.name = name
        super().__init__(f"Unknown recipe '{name}'. Available: {', '.join(sorted(known))}")
