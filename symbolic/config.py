import os


def _flag(name, default):
    return os.environ.get(name, default).lower() in ['true', 'on', '1']


class Config:
    DEBUG = _flag('SYMBOLIC_DEBUG', 'false')
    LOG_LEVEL = os.environ.get('SYMBOLIC_LOG_LEVEL', 'WARNING').upper()
    PROMPT = os.environ.get('SYMBOLIC_PROMPT', '> ')
