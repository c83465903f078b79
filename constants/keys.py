class UIKeys:
    """Keys for UI widgets in ``st.session_state``."""

    WIZARD_SELECT = "ui.wizard_select"
    AUTOSAVE_UPLOAD = "ui.autosave_upload"


class StateKeys:
    """Keys for data stored in ``st.session_state``."""

    ACTIVE_WIZARD = "active_wizard"
    DEBUG_MODE = "debug_mode"
    SESSION_RESULTS = "session_results"
