"""Audio cue sinks. The browser synthesizes the sounds; the server only names them."""

from typing import Protocol

from .models import Sound


class AudioSink(Protocol):
    def play(self, cue: Sound) -> None: ...


class SilentAudio:
    def play(self, cue: Sound) -> None:
        pass


class QueuedAudio:
    """Collects cues until the session ships them to the client."""

    def __init__(self, muted: bool = False):
        self.muted = muted
        self.pending: list[Sound] = []

    def play(self, cue: Sound) -> None:
        if self.muted:
            return
        self.pending.append(cue)

    def toggle_mute(self) -> bool:
        self.muted = not self.muted
        if self.muted:
            self.pending.clear()
        return self.muted

    def drain(self) -> list[str]:
        cues = [cue.value for cue in self.pending]
        self.pending.clear()
        return cues
