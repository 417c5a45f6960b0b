class RecipeflowError(Exception):
    pass


class ConfigError(RecipeflowError):
    pass


class MissingFileError(RecipeflowError):
    pass


class ValidationError(RecipeflowError):
    pass


class CatalogError(ValidationError):
    pass


class TimerError(ValidationError):
    pass
