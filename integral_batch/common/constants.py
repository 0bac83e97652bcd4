from dataclasses import dataclass

@dataclass(frozen=True)
class ProcessingConstants:
    """Centralized processing constants grouped by module for readability.

    The attributes are organized in the same order as the processing flow:
    image decoding → channel integral output → batch scheduling.
    Shared items come first.
    """

    # ── Shared/common (used across modules) ────────────────────────────────────
    OUTPUT_EXTENSION: str = '.integral'  # Appended to the input path, never replaces its suffix
    OUTPUT_ENCODING: str = 'ascii'

    # ── Image decoding ─────────────────────────────────────────────────────────
    IMAGE_READ_MODE: str = 'color'  # One of READ_MODES in integral_image.computer

    # ── Integral image output ──────────────────────────────────────────────────
    DECIMAL_PLACES: int = 1
    VALUE_SEPARATOR: str = ' '
    ROW_SEPARATOR: str = '\n'
    CHANNEL_SEPARATOR: str = '\n\n'  # Exactly one blank line between channels

    # ── Batch scheduling ───────────────────────────────────────────────────────
    DEFAULT_THREAD_COUNT: int = 0  # 0 → use the hardware concurrency hint
    THREAD_NAME_PREFIX: str = 'integral-batch'

# Global instance for easy access
CONSTANTS = ProcessingConstants()
