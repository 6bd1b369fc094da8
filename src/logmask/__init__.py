"""
logmask – field-level masking of structured values for logs.

Import path convention::

    from logmask.application.masking import LogMasker, MaskSensitiveData, sensitive
    from logmask.kernel.errors import InvalidPatternError
    from logmask.observability.logging import log_execution
    from logmask.config import EnvSettingsLoader, LogMaskSettings
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
