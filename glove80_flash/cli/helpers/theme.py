"""Theme, icons and themed console for glove80-flash output."""

from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.text import Text
from rich.theme import Theme


class Colors:
    """Color palette for CLI output."""

    SUCCESS = "bold green"
    ERROR = "bold red"
    WARNING = "bold yellow"
    INFO = "bold blue"

    PRIMARY = "cyan"
    SECONDARY = "blue"
    ACCENT = "magenta"
    MUTED = "dim"

    HEADER = "bold cyan"
    SUBHEADER = "bold blue"
    HIGHLIGHT = "bold white"


class Icons:
    """Icons for the different message types."""

    SUCCESS = "✅"
    ERROR = "❌"
    WARNING = "⚠️"
    INFO = "ℹ️"

    BULLET = "•"

    KEYBOARD = "⌨️"
    FIRMWARE = "🔧"
    FLASH = "⚡"
    LOADING = "🔄"
    FOLDER = "📁"

    # Text fallbacks for --no-emoji
    _TEXT_FALLBACKS = {
        "SUCCESS": "[OK]",
        "ERROR": "[ERROR]",
        "WARNING": "[WARN]",
        "INFO": "",
        "BULLET": "-",
        "KEYBOARD": "",
        "FIRMWARE": "",
        "FLASH": "",
        "LOADING": "...",
        "FOLDER": "",
    }

    @classmethod
    def get_icon(cls, icon_name: str, icon_mode: str = "emoji") -> str:
        """Get icon based on the specified mode.

        Args:
            icon_name: Name of the icon (e.g., "SUCCESS", "ERROR")
            icon_mode: Icon mode - "emoji" or "text"

        Returns:
            The appropriate icon based on mode
        """
        if icon_mode == "emoji":
            return getattr(cls, icon_name, "")
        return cls._TEXT_FALLBACKS.get(icon_name, "")

    @classmethod
    def format_with_icon(
        cls, icon_name: str, text: str, icon_mode: str = "emoji"
    ) -> str:
        """Prefix ``text`` with an icon, skipping empty icons."""
        icon = cls.get_icon(icon_name, icon_mode)
        if icon:
            return f"{icon} {text}"
        return text


GLOVE80_FLASH_THEME = Theme(
    {
        "success": Colors.SUCCESS,
        "error": Colors.ERROR,
        "warning": Colors.WARNING,
        "info": Colors.INFO,
        "primary": Colors.PRIMARY,
        "secondary": Colors.SECONDARY,
        "accent": Colors.ACCENT,
        "muted": Colors.MUTED,
        "header": Colors.HEADER,
        "subheader": Colors.SUBHEADER,
        "highlight": Colors.HIGHLIGHT,
    }
)


class ThemedConsole:
    """Console wrapper with the glove80-flash theme applied.

    Output goes to stderr, leaving stdout free for --version and --help.
    """

    def __init__(self, icon_mode: str = "emoji") -> None:
        """Initialize themed console.

        Args:
            icon_mode: Icon mode - "emoji" or "text"
        """
        self.console = Console(theme=GLOVE80_FLASH_THEME, stderr=True, highlight=False)
        self.icon_mode = icon_mode

    def _print(self, icon_name: str, message: str, style: str) -> None:
        self.console.print(
            Icons.format_with_icon(icon_name, message, self.icon_mode),
            style=style,
            markup=False,
        )

    def print_success(self, message: str) -> None:
        """Print success message with icon and styling."""
        self._print("SUCCESS", message, "success")

    def print_error(self, message: str) -> None:
        """Print error message with icon and styling."""
        self._print("ERROR", message, "error")

    def print_warning(self, message: str) -> None:
        """Print warning message with icon and styling."""
        self._print("WARNING", message, "warning")

    def print_info(self, message: str) -> None:
        """Print info message with icon and styling."""
        self._print("INFO", message, "info")

    def print_progress(self, message: str) -> None:
        """Print a step that is still running."""
        self._print("LOADING", message, "primary")

    def print_list_item(self, message: str, indent: int = 1) -> None:
        """Print list item with bullet and styling."""
        spacing = "  " * indent
        bullet = Icons.get_icon("BULLET", self.icon_mode)
        self.console.print(f"{spacing}{bullet} {message}", style="primary", markup=False)


class PanelStyles:
    """Predefined panel styling templates."""

    @staticmethod
    def create_header_panel(
        title: str, subtitle: str = "", icon: str = "", icon_mode: str = "emoji"
    ) -> Panel:
        """Create styled header panel.

        Args:
            title: Main title
            subtitle: Optional subtitle
            icon: Icon name to include
            icon_mode: Icon mode - "emoji" or "text"

        Returns:
            Configured Panel instance
        """
        panel_title = (
            Icons.format_with_icon(icon.upper(), title, icon_mode) if icon else title
        )
        content = (
            Text(subtitle, style=Colors.SUBHEADER)
            if subtitle
            else Text(title, style=Colors.HEADER)
        )
        return Panel(
            content,
            title=panel_title,
            border_style=Colors.SECONDARY,
            padding=(0, 1),
        )

    @staticmethod
    def create_instructions_panel(
        content: str, title: str, icon_mode: str = "emoji"
    ) -> Panel:
        """Panel telling the user which keys to press."""
        return Panel(
            Text(content, style=Colors.HIGHLIGHT),
            title=Icons.format_with_icon("KEYBOARD", title, icon_mode),
            border_style=Colors.PRIMARY,
            padding=(0, 1),
        )


def get_themed_console(use_emoji: bool = True) -> ThemedConsole:
    """Get a themed console instance.

    Args:
        use_emoji: Whether to use emoji icons or text fallbacks

    Returns:
        Configured ThemedConsole instance
    """
    return ThemedConsole(icon_mode="emoji" if use_emoji else "text")


def get_icon_mode_from_context(ctx: Any) -> str:
    """Icon mode stored on the typer context, "emoji" when there is none.

    Args:
        ctx: Typer context whose ``obj`` is the command's ``AppContext``

    Returns:
        Icon mode string: "emoji" or "text"
    """
    return getattr(getattr(ctx, "obj", None), "icon_mode", "emoji")


def is_verbose_from_context(ctx: Any) -> bool:
    """Whether the command was run with -v, -vv or --debug."""
    return bool(getattr(getattr(ctx, "obj", None), "verbose", False))
