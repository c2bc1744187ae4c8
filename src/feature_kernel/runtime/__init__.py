from .run import START_MISSING_CALLBACK_ERROR, FeatureRun, MissingCallbackError

__all__ = ["FeatureRun", "MissingCallbackError", "START_MISSING_CALLBACK_ERROR"]
