from .errors import InputError

DEFAULT_THEME = "corporate"

PRESENTATION_THEMES = {
    "corporate": {
        "name": "Corporate",
        "bgColor": "#ffffff",
        "textColor": "#333333",
        "accentColor": "#0078d4",
        "headerBg": "#f3f3f3",
        "fontFamily": "'Segoe UI', sans-serif",
        "slideGradient": "linear-gradient(to bottom, #f9f9f9, #ffffff)",
        "boxShadow": "0 4px 8px rgba(0, 0, 0, 0.05)",
    },
    "modern": {
        "name": "Modern",
        "bgColor": "#f5f5f7",
        "textColor": "#1d1d1f",
        "accentColor": "#0071e3",
        "headerBg": "#ffffff",
        "fontFamily": "'SF Pro Display', 'Helvetica Neue', sans-serif",
        "slideGradient": "linear-gradient(to right, #f5f5f7, #fafafa)",
        "boxShadow": "0 10px 20px rgba(0, 0, 0, 0.08)",
    },
    "dark": {
        "name": "Dark",
        "bgColor": "#1e1e1e",
        "textColor": "#e0e0e0",
        "accentColor": "#75ddff",
        "headerBg": "#252525",
        "fontFamily": "'Roboto', sans-serif",
        "slideGradient": "linear-gradient(to bottom, #252525, #1e1e1e)",
        "boxShadow": "0 8px 16px rgba(0, 0, 0, 0.3)",
    },
    "colorful": {
        "name": "Colorful",
        "bgColor": "#ffffff",
        "textColor": "#333333",
        "accentColor": "#ff5722",
        "headerBg": "#ffebee",
        "fontFamily": "'Poppins', sans-serif",
        "slideGradient": "linear-gradient(135deg, #fff9c4 0%, #ffffff 100%)",
        "boxShadow": "0 6px 12px rgba(255, 87, 34, 0.1)",
    },
}

# Blue, green, red, purple.
PLACEHOLDER_THEMES = [
    {"bgColor": "#f0f9ff", "textColor": "#0c4a6e"},
    {"bgColor": "#f0fdf4", "textColor": "#14532d"},
    {"bgColor": "#fef2f2", "textColor": "#7f1d1d"},
    {"bgColor": "#faf5ff", "textColor": "#581c87"},
]


def get_theme(name=None):
    key = (name or DEFAULT_THEME).strip().lower()
    theme = PRESENTATION_THEMES.get(key)
    if theme is None:
        choices = ", ".join(sorted(PRESENTATION_THEMES))
        raise InputError(f"Unknown theme '{name}'. Choose one of: {choices}")
    return theme
