import os


def _env_flag(name, default='false'):
    return os.environ.get(name, default).strip().lower() in ('1', 'true', 'yes', 'y')


class Config:
    """Base configuration"""

    DEBUG = False

    # Logging
    # Rotating log file is only written when a directory is configured
    LOG_DIR = os.environ.get('LOCALBAK_LOG_DIR')
    LOG_FILE_MAX_BYTES = 10485760  # 10MB
    LOG_FILE_BACKUP_COUNT = 10

    # Restore
    # Pre-supplied answer to the delete-after-restore confirmation
    ASSUME_YES = _env_flag('LOCALBAK_ASSUME_YES')


class VerboseConfig(Config):
    """Verbose configuration, logs every action"""
    DEBUG = True


# Configuration dictionary
config = {
    'verbose': VerboseConfig,
    'default': Config
}


def get_config(config_name=None):
    """Look up a configuration class, falling back to LOCALBAK_ENV and then 'default'"""
    if config_name is None:
        config_name = os.environ.get('LOCALBAK_ENV', 'default')
    return config[config_name]
