"""Constants for the core package."""

# Node kinds understood by the renderer (YAML `kind:` values)
WIDGET_KINDS = ("label", "text_input", "button", "container")

# Zero values substituted for missing context slots
STRING_ZERO = ""
COUNTER_ZERO = 0

# Context slot kinds as reported in errors and logs
STRING_KIND = "string"
COUNTER_KIND = "counter"

# Widget and context names: lowercase snake_case, may contain digits
NAME_PATTERN = r"^[a-z][a-z0-9_]*$"

DEFAULT_WINDOW_WIDTH = 320
DEFAULT_WINDOW_HEIGHT = 240
