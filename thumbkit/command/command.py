"""
Command line model.

A Command is a program followed by an ordered list of tokens. Each token is
made of parts that are either literal text (flags, fixed modifiers) or values
coming from the request, which are shell-escaped when rendered. The same
command renders as one shell string or as argv lists for every stage.
"""
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple
import shlex


@dataclass(frozen=True)
class Part:
    """A fragment of a token."""
    text: str
    escape: bool = False

    def render(self) -> str:
        return shlex.quote(self.text) if self.escape else self.text


Token = Tuple[Part, ...]


def literal(text: str) -> Part:
    return Part(str(text), escape=False)


def value(text) -> Part:
    return Part(str(text), escape=True)


def render_token(token: Token) -> str:
    """Shell-escaped form of a token."""
    return "".join(part.render() for part in token)


def raw_token(token: Token) -> str:
    """Unescaped form of a token, as passed in argv."""
    return "".join(part.text for part in token)


class Command:
    """
    Ordered, escaped argument list for one external program.

    Example:
        cmd = Command("/usr/bin/convert")
        cmd.add_flag("-auto-orient")
        cmd.add_option("-colorspace", "Gray")
        cmd.add_value("out file.jpg")
        str(cmd)    # "/usr/bin/convert -auto-orient -colorspace Gray 'out file.jpg'"
        cmd.argv()  # ["/usr/bin/convert", "-auto-orient", "-colorspace", "Gray", "out file.jpg"]
    """

    def __init__(self, program: str = ""):
        self.program = program
        self.tokens: List[Token] = []
        self.pipe: Optional["Command"] = None

    def add_token(self, *parts: Part) -> "Command":
        """Append one token assembled from parts. Empty tokens are dropped."""
        token = tuple(p for p in parts if p.text)
        if token:
            self.tokens.append(token)
        return self

    def add_flag(self, flag: str) -> "Command":
        """Append a literal flag; a multi-word flag becomes several tokens."""
        for word in flag.split():
            self.add_token(literal(word))
        return self

    def add_option(self, flag: str, option_value) -> "Command":
        """Append a flag followed by its escaped value, or nothing when the value is empty."""
        if option_value is None or str(option_value) == "":
            return self
        self.add_flag(flag)
        return self.add_token(value(option_value))

    def add_value(self, option_value) -> "Command":
        """Append a single escaped value token."""
        if option_value is None or str(option_value) == "":
            return self
        return self.add_token(value(option_value))

    def extend(self, other: "Command") -> "Command":
        """Append every token of another (program-less) command."""
        self.tokens.extend(other.tokens)
        return self

    def pipe_to(self, other: "Command") -> "Command":
        """Feed this command's standard output into another command."""
        self.pipe = other
        return self

    def arguments(self) -> List[str]:
        """Unescaped tokens of this stage, without the program."""
        return [raw_token(t) for t in self.tokens]

    def argv(self) -> List[str]:
        """Unescaped argv of this stage."""
        head = [self.program] if self.program else []
        return head + self.arguments()

    def stages(self) -> List[List[str]]:
        """Argv of every stage in the pipeline, in order."""
        stages = [self.argv()]
        if self.pipe is not None:
            stages.extend(self.pipe.stages())
        return stages

    def render(self) -> str:
        words: Iterable[str] = [render_token(t) for t in self.tokens]
        if self.program:
            words = [shlex.quote(self.program), *words]
        line = " ".join(words)
        if self.pipe is not None:
            line = f"{line} | {self.pipe.render()}"
        return line

    def __str__(self) -> str:
        return self.render()

    def __len__(self) -> int:
        return len(self.tokens)

    def __repr__(self) -> str:
        return f"Command({self.render()!r})"
