"""Static metadata describing RecallCart."""

APP_NAME = "RecallCart"
APP_VERSION = "0.1"
APP_LICENSE = "MIT License"
APP_ABOUT_TEXT = (
    "RecallCart is a shopping-list memory game for cognitive training. "
    "Study a list of groceries, then find them again on crowded shelves "
    "with a limited number of hints."
)
