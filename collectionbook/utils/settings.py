from PySide6.QtCore import QSettings, Signal

# Defaults for settings that are accessed from multiple places.
DEFAULT_SETTINGS = {
    # Grid lessons (steps 0-4)
    'grid_columns': 5,
    'grid_header_height': 60.0,
    # Passport (wallet) example
    'passport_header_height': 72.0,
    'passport_separation': 72.0,  # Distance between passes at their furthest
    'passport_overlap': 8.0,  # Extra pass height drawn under the next one (rounded corners)
    'passport_inset': 8.0,
    'passport_height': 480.0,  # Full height of an expanded pass
    'passport_elasticity': 1.0,  # 0.0 = inelastic, 1.0 = elastic, >1.0 is exaggerated
    'passport_collapse_height': 96.0,  # Band at the bottom holding collapsed passes
    # Dynamics (step 4)
    'dynamics_displacement_constant': 0.18,
    'dynamics_cell_damping': 0.40,
    'dynamics_header_damping': 0.20,
    'dynamics_min_scroll_delta': 1.0,  # Sub-pixel scrolls are ignored
    # Diagnostics
    'layout_trace_logs': False,
}


class Settings(QSettings):
    # Signal that shows that the setting with the given string was changes
    change = Signal(str, object, name='settingsChanged')

    def __init__(self):
        super().__init__('collectionbook', 'collectionbook')

    def setValue(self, key, value):
        super().setValue(key, value)
        self.change.emit(key, value)

# Common shared instance to ensure the Signal is also shared
settings = Settings()


def get_float_setting(key: str) -> float:
    return float(settings.value(key, defaultValue=DEFAULT_SETTINGS[key],
                                type=float))


def get_int_setting(key: str) -> int:
    return int(settings.value(key, defaultValue=DEFAULT_SETTINGS[key],
                              type=int))
