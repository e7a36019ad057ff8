"""Fatal conditions that stop a run before or outside the per-student loop"""


class ConfigError(RuntimeError):
    """Required configuration (BASE_URL, credentials) is missing"""


class RecordSourceError(RuntimeError):
    """The student CSV could not be read or is missing required columns"""


class LoginFailed(RuntimeError):
    """Fresh login did not reach the dashboard"""


class StepTimeout(RuntimeError):
    """A bounded wait expired while a step needed the element to continue"""
