"""
Constants shared by the calculator core and web layer.
"""

OPERATORS = "+-*/"

# Characters a raw expression may contain before normalization
ALLOWED_CHARACTERS = set("0123456789+-*/().%") | {" ", "\t", "\n", "\r"}

# Display text standing in for a non-numeric or failed evaluation
ERROR_SENTINEL = "Error"
SENTINELS = (ERROR_SENTINEL, "Infinity", "-Infinity", "NaN")

# Fractional digits kept on non-integer results
RESULT_PRECISION = 10

HISTORY_LIMIT = 200

THEME_LIGHT = "light"
THEME_DARK = "dark"
THEMES = (THEME_LIGHT, THEME_DARK)
DEFAULT_THEME = THEME_LIGHT

# Seeded by "add sample data"; results are computed, not stored here
SAMPLE_EXPRESSIONS = ["5+3", "12/4", "7*6", "50%", "200-10%"]

# Keypad layout rendered by the template, row by row
KEYPAD_ROWS = [
    ["(", ")", "%", "/"],
    ["7", "8", "9", "*"],
    ["4", "5", "6", "-"],
    ["1", "2", "3", "+"],
    ["0", ".", "Backspace", "Enter"],
]

KEY_LABELS = {
    "Backspace": "⌫",
    "Enter": "=",
    "Escape": "C",
    "*": "×",
    "/": "÷",
}

# Deepest run of parentheses and unary signs the parser accepts
MAX_NESTING = 100
