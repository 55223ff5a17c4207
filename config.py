import os

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///calculator.db").replace("postgres://", "postgresql://", 1)
SQLALCHEMY_DATABASE_URI = DATABASE_URL

SECRET_KEY = os.getenv("SECRET_KEY")

# Calculator settings
CALCULATOR_HISTORY_LIMIT = int(os.getenv("CALCULATOR_HISTORY_LIMIT", "200"))
# Time zone used to show history timestamps
CALCULATOR_TIME_ZONE = os.getenv("CALCULATOR_TIME_ZONE", "UTC")

# Jinja2 whitespace control - prevents unwanted line breaks in rendered HTML
JINJA2_TRIM_BLOCKS = True
JINJA2_LSTRIP_BLOCKS = True
