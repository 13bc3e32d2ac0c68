THEMES = {
    "Dark": {
        "bg": "#1e1f22",
        "text": "#e6e6e6",
        "text_muted": "#9a9ca3",
        "button_bg": "#2f3136",
        "button_text": "#e6e6e6",
        "button_active": "#40444b",
        "input_bg": "#2b2d31",
        "border": 1,
        "separator": "#3a3c42",
        "remaining": "#ff324b",
        "ready": "#32ff4b",
    },
    "Light": {
        "bg": "#f5f5f7",
        "text": "#1d1d1f",
        "text_muted": "#6e6e73",
        "button_bg": "#ffffff",
        "button_text": "#1d1d1f",
        "button_active": "#e5e5ea",
        "input_bg": "#ffffff",
        "border": 1,
        "separator": "#d2d2d7",
        "remaining": "#d70015",
        "ready": "#1a9e35",
    },
    "Dust II": {
        "bg": "#2a241c",
        "text": "#f1e3c6",
        "text_muted": "#b8a584",
        "button_bg": "#3b3227",
        "button_text": "#f1e3c6",
        "button_active": "#4d4233",
        "input_bg": "#352d23",
        "border": 1,
        "separator": "#5a4c3a",
        "remaining": "#ff6b3d",
        "ready": "#9be15d",
    },
}

DEFAULT_THEME = "Dark"
