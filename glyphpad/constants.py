"""Constants and configuration for the glyphpad editor."""

class EditorConstants:
    """Central configuration constants for the editor."""

    NAME = "glyphpad"

    # Render-only substitutes for clusters that can't be shown verbatim
    TAB_GLYPH = " "
    CONTROL_GLYPH = "▯"
    ZERO_WIDTH_GLYPH = "·"
    WHITESPACE_GLYPH = "␣"
    ELLIPSIS_GLYPH = "⋯"
    FILLER_GLYPH = "~"  # Rows past the end of the document

    # Screen layout (rows reserved below the text area)
    STATUS_BAR_HEIGHT = 1
    MESSAGE_BAR_HEIGHT = 1

    # Messages
    MESSAGE_DURATION = 5.0  # Seconds a message bar message stays visible
    HELP_MESSAGE = "HELP: Ctrl-S = save | Ctrl-Q = quit"
    SAVE_AS_PROMPT = "Save as: "
    SAVE_ABORTED_MESSAGE = "Save aborted."
    SAVED_MESSAGE = "File saved successfully."
    SAVE_ERROR_MESSAGE = "Error writing file!"
    OPEN_ERROR_MESSAGE = "Could not open file: {}"
    QUIT_CONFIRM_PROMPT = "Save file? (y, n) "
    NO_NAME = "[No Name]"
    MODIFIED_INDICATOR = "(modified)"

    # Resize handling
    RESIZE_PIPE_MARKER = b'R'  # Byte written to pipe to signal resize

    # Logging
    LOG_FILE_ENV = "GLYPHPAD_LOG"
