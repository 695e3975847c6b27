"""Interaction logger for tracking reply generation.

Captures every reply the storyteller produces, either from the language
model (prompt, parameters, raw response) or from the local fallback (branch
taken, sampled value). Logs are saved as JSON Lines: one session header
followed by one object per interaction, appended as they happen.
"""

import json
import threading
from datetime import datetime
from pathlib import Path
from typing import Optional, Dict, Any, List


class InteractionLogger:
    """Logs all reply generations of one server process.

    Attributes:
        session_id: Unique identifier for this process session.
        log_dir: Directory where log files are saved.
        log_file: Path to the current session's log file.
        interaction_count: Number of interactions logged so far.
    """

    def __init__(self, log_dir: str = "logs", session_name: str = "storyteller"):
        """Initialize the interaction logger.

        Args:
            log_dir: Directory to save log files (created if doesn't exist).
            session_name: Prefix for the log file name.
        """
        self.session_id = datetime.now().strftime("%Y%m%d_%H%M%S")
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)

        safe_name = "".join(c if c.isalnum() or c in ('-', '_') else '_'
                            for c in session_name)[:50]

        self.log_file = self.log_dir / f"{safe_name}_{self.session_id}.jsonl"
        self.interaction_count = 0
        # Requests may be served concurrently; lines must not interleave.
        self._lock = threading.Lock()

        self._save_metadata(session_name)

    def _save_metadata(self, session_name: str) -> None:
        """Save session metadata to log file."""
        metadata = {
            "type": "session_start",
            "session_id": self.session_id,
            "session_name": session_name,
            "start_time": datetime.now().isoformat()
        }

        with open(self.log_file, 'w', encoding='utf-8') as f:
            f.write(json.dumps(metadata, ensure_ascii=False) + "\n")

    def log_remote_reply(
        self,
        messages: List[Dict[str, str]],
        content: str,
        raw_tool_call: Optional[Dict[str, Any]] = None,
        tool_call: Optional[Dict[str, Any]] = None,
        model: str = "gpt-4.1-mini",
        temperature: float = 0.8,
        max_tokens: int = 150
    ) -> None:
        """Log a reply generated by the language model.

        Args:
            messages: The prompt turns sent to the model.
            content: The reply text returned by the model.
            raw_tool_call: The first tool call as returned (name and argument text).
            tool_call: The tool invocation that was accepted, if any.
            model: The LLM model used.
            temperature: Temperature parameter used.
            max_tokens: Max tokens parameter used.
        """
        interaction = {
            "type": "remote_reply",
            "timestamp": datetime.now().isoformat(),
            "model": model,
            "parameters": {
                "temperature": temperature,
                "max_tokens": max_tokens
            },
            "prompt": messages,
            "response": {
                "content": content,
                "raw_tool_call": raw_tool_call,
                "tool_call": tool_call
            }
        }

        self._append_interaction(interaction)

    def log_fallback_reply(
        self,
        branch: str,
        content: str,
        tool_call: Optional[Dict[str, Any]] = None,
        tool_roll: Optional[float] = None,
        history_length: int = 0
    ) -> None:
        """Log a reply produced by the local fallback.

        Args:
            branch: Which case produced the text (opening, listening, follow_up).
            content: The reply text.
            tool_call: The sampled tool invocation, if any.
            tool_roll: The random value used for tool sampling.
            history_length: Number of turns in the history.
        """
        interaction = {
            "type": "fallback_reply",
            "timestamp": datetime.now().isoformat(),
            "branch": branch,
            "history_length": history_length,
            "tool_roll": tool_roll,
            "response": {
                "content": content,
                "tool_call": tool_call
            }
        }

        self._append_interaction(interaction)

    def _append_interaction(self, interaction: Dict[str, Any]) -> None:
        """Append an interaction to the log file as one JSON line.

        Args:
            interaction: The interaction data to append.
        """
        line = json.dumps(interaction, ensure_ascii=False) + "\n"
        with self._lock:
            with open(self.log_file, 'a', encoding='utf-8') as f:
                f.write(line)
            self.interaction_count += 1

    def get_log_path(self) -> str:
        """Get the path to the current log file."""
        return str(self.log_file.resolve())

    def get_interaction_count(self) -> int:
        """Get the number of interactions logged."""
        return self.interaction_count

    def read_interactions(self) -> List[Dict[str, Any]]:
        """Read back the interactions logged so far, without the session header."""
        with open(self.log_file, 'r', encoding='utf-8') as f:
            entries = [json.loads(line) for line in f if line.strip()]
        return [e for e in entries if e.get("type") != "session_start"]
