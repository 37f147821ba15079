from dataclasses import dataclass
from string import digits as DIGITS
from warnings import warn


def _digit(char: str) -> int:
    """A character that is not one of 0-9 counts as 0."""
    return int(char) if char in DIGITS else 0


def _only_digits(text: str) -> str:
    return "".join(ch for ch in text if ch in DIGITS)


@dataclass(frozen=True)
class NacaDesignation:
    """
    Canonical NACA designation, a zero-padded string of 4 or 5 digits.

    4-digit family `MPTT`:
    - M: maximum camber in percent of chord (`max_camber` = M / 100)
    - P: position of maximum camber in tenths of chord (`camber_position` = P / 10)
    - TT: thickness in percent of chord (`thickness` = TT / 100)

    5-digit family `LPQTT`:
    - L: design lift coefficient code (`design_lift` = 3 L / 20)
    - P: position code of the camber peak (`peak_position` = P / 20)
    - Q: 0 for a normal camber line, 1 for a reflex camber line
    - TT: thickness in percent of chord

    The thickness fraction is the last two digits / 100 for both families.
    """
    digits: str

    @classmethod
    def parse(cls, code: int | str, family: int | None = None) -> "NacaDesignation":
        """
        Build a designation from user input.

        @param code: Integer or string code, optionally prefixed with "NACA". For the 5-digit family every
                     other character that is not one of 0-9 is stripped. For the 4-digit family the string is
                     padded/truncated to 4 characters and a character that is not one of 0-9 becomes 0.
        @param family: 4 or 5. If omitted, 5 digits select the 5-digit family, anything else the 4-digit family.
        """
        text = str(code).strip()
        if text[:4].upper() == "NACA":
            text = text[4:].strip()
        if family is None:
            family = 5 if len(_only_digits(text)) == 5 else 4
        if family == 5:
            text = _only_digits(text).rjust(5, "0")[:5]
        elif family == 4:
            text = text.rjust(4, "0")[:4]
        else:
            raise ValueError(f"Unsupported NACA family: {family}")
        digits = "".join(str(_digit(ch)) for ch in text)
        if digits != text:
            warn(f"NACA code {code!r} contains non-digit characters, treated as {digits!r}")
        return cls(digits)

    def __str__(self) -> str:
        return self.digits

    @property
    def family(self) -> int:
        return len(self.digits)

    @property
    def thickness(self) -> float:
        return int(self.digits[-2:]) / 100.0

    @property
    def max_camber(self) -> float:
        self._require(4)
        return int(self.digits[0]) / 100.0

    @property
    def camber_position(self) -> float:
        self._require(4)
        return int(self.digits[1]) / 10.0

    @property
    def lift_code(self) -> int:
        self._require(5)
        return int(self.digits[0])

    @property
    def position_code(self) -> int:
        self._require(5)
        return int(self.digits[1])

    @property
    def reflex(self) -> bool:
        self._require(5)
        return self.digits[2] == "1"

    @property
    def design_lift(self) -> float:
        return self.lift_code * 3.0 / 20.0

    @property
    def peak_position(self) -> float:
        return self.position_code / 20.0

    def _require(self, family: int) -> None:
        if self.family != family:
            raise AttributeError(f"NACA {self.digits} is not a {family}-digit designation")
