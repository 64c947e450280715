"""
Styles for the Cosmic Calendar application.
Dark palette and widget style sheets shared by the calendar window.
"""

class Colors:
    # Background Colors
    BG_PRIMARY = "#0F172A"      # Main background
    BG_PANELS = "#1E293B"       # Chart background
    BG_TOOLTIP = "rgba(11, 18, 32, 0.92)"

    # Text Colors
    TEXT_PRIMARY = "#E2E8F0"    # Primary text
    TEXT_SECONDARY = "#94A3B8"  # Secondary text
    TEXT_MUTED = "#64748B"      # Muted text

    # Accent Colors
    ACCENT_BLUE = "#3B82F6"
    ACCENT_CYAN = "#00FFFF"

    ERROR = "#EF4444"

    # Border Colors
    BORDER_SUBTLE = "#334155"
    BORDER_ACCENT = "#475569"


class CalendarStyles:
    """Style sheets for the calendar dialog."""

    DIALOG_STYLE = f"""
        QDialog {{
            background-color: {Colors.BG_PRIMARY};
            color: {Colors.TEXT_PRIMARY};
        }}
        QLabel {{
            color: {Colors.TEXT_PRIMARY};
            font-family: 'Segoe UI', sans-serif;
        }}
    """

    TITLE_LABEL = f"""
        QLabel {{
            color: {Colors.ACCENT_CYAN};
            font-size: 20px;
            font-weight: 700;
            padding: 6px 10px 0px 10px;
        }}
    """

    PERIOD_LABEL = f"""
        QLabel {{
            color: {Colors.TEXT_PRIMARY};
            font-size: 16px;
            font-weight: 600;
            padding-left: 10px;
        }}
    """

    RANGE_LABEL = f"""
        QLabel {{
            color: {Colors.TEXT_SECONDARY};
            font-size: 12px;
            padding-left: 10px;
        }}
    """

    STATS_LABEL = f"""
        QLabel {{
            color: {Colors.TEXT_SECONDARY};
            font-size: 13px;
            padding: 8px 10px;
            border-top: 1px solid {Colors.BORDER_SUBTLE};
        }}
    """

    TOOLTIP_LABEL = f"""
        QLabel {{
            background-color: {Colors.BG_TOOLTIP};
            color: {Colors.TEXT_PRIMARY};
            border: 1px solid {Colors.BORDER_ACCENT};
            border-radius: 6px;
            padding: 6px 10px;
            font-size: 12px;
        }}
    """

    ERROR_LABEL = f"""
        QLabel {{
            color: {Colors.ERROR};
            font-size: 14px;
            padding: 40px;
        }}
    """

    BUTTON_STYLE = f"""
        QPushButton {{
            background-color: {Colors.ACCENT_BLUE};
            color: #FFFFFF;
            border: 1px solid rgba(0, 255, 255, 0.3);
            border-radius: 6px;
            padding: 8px 16px;
            font-weight: 600;
            font-size: 12px;
            font-family: 'Segoe UI', sans-serif;
            min-width: 110px;
        }}
        QPushButton:hover {{
            background-color: #60A5FA;
            border: 1px solid {Colors.ACCENT_CYAN};
        }}
        QPushButton:pressed {{
            background-color: #1E40AF;
        }}
    """
