from __future__ import annotations

from textual.theme import Theme

TUI_THEME_NAME = "recipeflow-ansi"

APP_CSS = """
Screen {
    background: $background;
    color: $text;
    padding: 0;
}

Header, Footer {
    background: $panel;
    color: $text;
}

#browse-body,
#recipe-shell {
    height: 1fr;
}

#cuisine-pane {
    width: 34;
    height: 1fr;
    padding: 0 1;
}

.layout-wide #cuisine-pane {
    width: 40;
}

#recipe-pane {
    width: 1fr;
    height: 1fr;
    padding: 0 1;
}

#heading,
#recipe-title {
    text-style: bold;
    padding: 1 0 0 0;
}

#summary,
#filters,
#recipe-meta,
#status {
    height: auto;
    color: $text-muted;
}

#mood-bar {
    height: auto;
    padding: 0 0 1 0;
}

#mood-bar Button {
    margin: 0 1 0 0;
    min-width: 10;
}

#cuisine-list, #recipe-list, #prereq-list, #step-list, #timer-list {
    height: auto;
    border: round $panel;
    background: $surface;
}

#cuisine-list, #recipe-list {
    height: 1fr;
}

#cuisine-list:focus,
#recipe-list:focus,
#prereq-list:focus,
#step-list:focus,
#timer-list:focus {
    border: round $primary;
}

ListView > ListItem.--highlight {
    background: $panel;
    text-style: bold;
}

ListView:focus > ListItem.--highlight {
    background: ansi_bright_yellow;
    color: ansi_black;
    text-style: bold;
}

ListView > ListItem.is-selected {
    background: ansi_bright_cyan;
    color: ansi_black;
}

ListView > ListItem.is-done Label {
    color: $text-muted;
    text-style: strike;
}

.section-label {
    text-style: bold;
    padding: 1 0 0 0;
}

#search-input {
    margin: 0 0 1 0;
    background: $surface;
    border: round $panel;
    color: $text;
}

Button {
    background: $surface;
    color: $text;
    border: round $panel;
}

Button.-primary {
    background: $primary;
    color: $button-color-foreground;
    border: round $primary;
}

TimerTray {
    dock: right;
    width: 44;
    height: 1fr;
    border: round $panel;
    padding: 0 1;
}

.layout-compact TimerTray {
    dock: bottom;
    width: 1fr;
    height: 12;
}

#timer-title {
    text-style: bold;
}

.timer-warning Label {
    color: $warning;
}

.timer-complete Label {
    color: $success;
    text-style: bold;
}

.is-hidden {
    display: none;
}
"""

TUI_THEMES = {
    TUI_THEME_NAME: Theme(
        name=TUI_THEME_NAME,
        primary="ansi_bright_yellow",
        secondary="ansi_bright_red",
        accent="ansi_bright_magenta",
        warning="ansi_bright_yellow",
        error="ansi_bright_red",
        success="ansi_bright_green",
        foreground="ansi_default",
        background="ansi_default",
        surface="ansi_default",
        panel="ansi_bright_black",
        dark=False,
        variables={
            "text": "ansi_default",
            "text-muted": "ansi_bright_black",
            "button-foreground": "ansi_default",
            "button-color-foreground": "ansi_black",
        },
    )
}
