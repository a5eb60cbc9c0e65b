"""Textual apps used by the textual prompt backend."""

from typing import List, Optional

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container, Vertical
from textual.widgets import Button, Input, OptionList, Static


def fuzzy_match(query: str, line: str) -> bool:
    """Case-insensitive subsequence match."""
    if not query:
        return True
    remaining = iter(line.lower())
    return all(char in remaining for char in query.lower())


def filter_options(query: str, options: List[str]) -> List[str]:
    """Options matching ``query``, substring matches before fuzzy ones."""
    lowered = query.lower()
    exact = [option for option in options if lowered in option.lower()]
    fuzzy = [option for option in options if option not in exact and fuzzy_match(query, option)]
    return exact + fuzzy


class FilterApp(App[Optional[str]]):
    """Filterable single-select list."""

    DEFAULT_CSS = """
    FilterApp {
        height: auto;
    }

    #filter-input {
        border: none;
        height: 1;
        padding: 0 1;
    }

    #filter-options {
        border: none;
        height: auto;
        max-height: 15;
    }
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel", priority=True),
        Binding("ctrl+c", "cancel", "Cancel", show=False, priority=True),
        Binding("down", "cursor_down", "Down", show=False),
        Binding("up", "cursor_up", "Up", show=False),
        Binding("ctrl+n", "submit_typed", "Use typed text", priority=True),
    ]

    def __init__(
        self, options: List[str], placeholder: str = "", value: str = "", strict: bool = True
    ):
        super().__init__()
        self.options = options
        self.strict = strict
        self.placeholder = placeholder
        self.initial_value = value
        self.matches: List[str] = self.entries(value)

    def entries(self, query: str) -> List[str]:
        """Options matching ``query``.

        When not strict, typed text that is not itself an option is listed
        last so it can be picked even while other options match.
        """
        matches = filter_options(query, self.options)
        typed = query.strip()
        if not self.strict and typed and typed not in self.options:
            matches.append(typed)
        return matches

    def compose(self) -> ComposeResult:
        yield Input(value=self.initial_value, placeholder=self.placeholder, id="filter-input")
        yield OptionList(*self.matches, id="filter-options")

    def on_mount(self) -> None:
        option_list = self.query_one(OptionList)
        if self.matches:
            option_list.highlighted = 0
        self.query_one(Input).focus()

    def on_input_changed(self, event: Input.Changed) -> None:
        """Re-filter the options as the user types."""
        self.matches = self.entries(event.value)
        option_list = self.query_one(OptionList)
        option_list.clear_options()
        option_list.add_options(self.matches)
        if self.matches:
            option_list.highlighted = 0

    def on_input_submitted(self, event: Input.Submitted) -> None:
        """Choose the highlighted option."""
        highlighted = self.query_one(OptionList).highlighted
        if self.matches and highlighted is not None:
            self.exit(self.matches[highlighted])
        else:
            self.exit(None)

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        self.exit(self.matches[event.option_index])

    def action_cursor_down(self) -> None:
        self.query_one(OptionList).action_cursor_down()

    def action_cursor_up(self) -> None:
        self.query_one(OptionList).action_cursor_up()

    def action_cancel(self) -> None:
        self.exit(None)

    def check_action(self, action: str, parameters) -> Optional[bool]:
        if action == "submit_typed":
            return not self.strict
        return True

    def action_submit_typed(self) -> None:
        """Submit the typed text as is, ignoring matches."""
        self.exit(self.query_one(Input).value.strip() or None)

    def run(self, **kwargs) -> Optional[str]:
        kwargs.setdefault("inline", True)
        return super().run(**kwargs)


class ConfirmApp(App[bool]):
    """Yes/no confirmation."""

    DEFAULT_CSS = """
    ConfirmApp {
        height: auto;
    }

    #confirm-dialog {
        height: auto;
        padding: 0 1;
    }

    #confirm-message {
        width: 100%;
        height: auto;
        padding: 1 0;
    }

    #button-container {
        width: 100%;
        height: auto;
        layout: horizontal;
    }

    Button {
        margin: 0 1;
    }
    """

    BINDINGS = [
        Binding("y", "answer(True)", "Yes"),
        Binding("n", "answer(False)", "No"),
        Binding("escape", "answer(False)", "No", show=False, priority=True),
        Binding("ctrl+c", "answer(False)", "No", show=False, priority=True),
    ]

    def __init__(self, message: str):
        super().__init__()
        self.message = message

    def compose(self) -> ComposeResult:
        with Vertical(id="confirm-dialog"):
            yield Static(self.message, id="confirm-message")
            with Container(id="button-container"):
                yield Button("Yes", variant="error", id="yes")
                yield Button("No", variant="primary", id="no")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle button press."""
        self.exit(event.button.id == "yes")

    def action_answer(self, answer: bool) -> None:
        self.exit(answer)

    def run(self, **kwargs) -> Optional[bool]:
        kwargs.setdefault("inline", True)
        return super().run(**kwargs)
