from .config import *  # noqa: F401,F403

SECRET_KEY = "test-secret"

DEBUG = False
TESTING = True

AUTO_INIT_DB = False
SLACK_WEBHOOK_URL = ""
DISCORD_WEBHOOK_URL = ""
