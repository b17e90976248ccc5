"""
interfaces/cli.py — Interactive CLI

Thin REPL over the Orchestrator. Uses rich for terminal rendering.
No routing decisions live here beyond the command words below; every
free-text line goes to Orchestrator.respond().

Commands:
  goal <description>   set a goal for this session
  plan <task>          ask the agent to break a task down
  calculate a op b     use the calculator
  search <query>       use web search
  tools                list registered tools
  status               show session state
  clear                delete this session's history, goals and task
  help                 show this help
  exit / quit / Ctrl+D leave
"""

from __future__ import annotations

from typing import Optional

from rich import box
from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from agent.orchestrator import Orchestrator
from agent.response_synthesizer import AgentResponse, ResponseKind
from config.settings import Settings
from observability.logger import get_logger

log = get_logger(__name__)

PLAN_PREFIX = "Please help me plan: "

_WELCOME = """\
## Welcome to the Shim Agent

This agent can:
1. Engage in conversations with memory
2. Plan and break down complex tasks
3. Use specialized tools (calculator, web search)
4. Track goals and maintain context

| Command | Description |
|---------|-------------|
| `goal <description>` | Set a goal |
| `plan <task>` | Break down a task |
| `calculate <number> <operation> <number>` | Calculate |
| `search <query>` | Search the web |
| `tools` | List tools |
| `status` | Show session state |
| `clear` | Clear conversation history |
| `exit` | Quit |

Type any other text to chat.
"""

_KIND_STYLES = {
    ResponseKind.TEXT: "green",
    ResponseKind.TOOL_RESULT: "cyan",
    ResponseKind.PLAN: "magenta",
    ResponseKind.ERROR: "red",
}


class CLIInterface:
    """REPL that forwards user lines to the Orchestrator and renders replies."""

    def __init__(
        self,
        orchestrator: Orchestrator,
        session_id: str,
        console: Optional[Console] = None,
    ):
        self.orchestrator = orchestrator
        self.session_id = session_id
        self.console = console or Console()

    def run(self) -> None:
        self.console.print(Markdown(_WELCOME))
        try:
            while True:
                try:
                    line = self.console.input("[bold cyan]You:[/] ")
                except (EOFError, KeyboardInterrupt):
                    self.console.print()
                    break
                if not self.handle_line(line):
                    break
        finally:
            self.orchestrator.shutdown()
            self.console.print("[dim]Goodbye.[/]")

    def handle_line(self, line: str) -> bool:
        """Process one input line. Returns False when the user asked to exit."""
        stripped = line.strip()
        if not stripped:
            return True

        lowered = stripped.lower()
        if lowered in ("exit", "quit"):
            return False

        if lowered == "clear":
            self.orchestrator.clear_history(self.session_id)
            self.console.print("[yellow]Conversation history cleared![/]")
        elif lowered == "help":
            self.console.print(Markdown(_WELCOME))
        elif lowered == "tools":
            self._cmd_tools()
        elif lowered == "status":
            self._cmd_status()
        elif line.startswith("goal "):
            goal = line[len("goal "):]
            self.orchestrator.set_goal(self.session_id, goal)
            self.console.print(Text.assemble(("Goal set: ", "green"), goal))
        elif line.startswith("plan "):
            task = line[len("plan "):]
            self._send(PLAN_PREFIX + task)
        else:
            self._send(line)
        return True

    # ── Helpers ───────────────────────────────────────────────────────────────

    def _send(self, message: str) -> AgentResponse:
        with self.console.status("[dim]thinking…[/]"):
            response = self.orchestrator.respond(message, self.session_id)
        self._render_response(response)
        return response

    def _render_response(self, response: AgentResponse) -> None:
        text = response.text if response.text.strip() else "(empty response)"
        title = "Assistant" if response.tool_name is None else f"Assistant · {response.tool_name}"
        self.console.print(Panel(
            Text(text),
            title=title,
            title_align="left",
            border_style=_KIND_STYLES.get(response.kind, "white"),
        ))

    def _cmd_tools(self) -> None:
        table = Table(title="Tools", box=box.SIMPLE)
        table.add_column("Name", style="cyan")
        table.add_column("Category")
        table.add_column("Description")
        for schema in self.orchestrator.tools.list_schemas():
            table.add_row(schema.name, schema.category, schema.description)
        self.console.print(table)

    def _cmd_status(self) -> None:
        session = self.orchestrator.sessions.get(self.session_id)
        if session is None:
            self.console.print("[dim]No state yet for this session.[/]")
            return
        table = Table(title=f"Session {self.session_id}", box=box.SIMPLE, show_header=False)
        for key, value in session.status_summary().items():
            table.add_row(key, str(value))
        for goal in session.goals:
            table.add_row("goal", goal)
        self.console.print(table)


def run_cli(settings: Settings, session_id: str) -> None:
    """Build the orchestrator from settings and run the REPL until exit."""
    orchestrator = Orchestrator.from_settings(settings)
    log.info("cli.start", session_id=session_id)
    CLIInterface(orchestrator, session_id=session_id).run()
    log.info("cli.stop", session_id=session_id)
