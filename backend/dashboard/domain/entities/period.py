"""Domain value object — the (month, year) scope shared by both rosters."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Period:
    """A reporting period. Every fetch, subscription and rollover is scoped by one."""

    mes: int
    anio: int

    def __post_init__(self) -> None:
        if not 1 <= self.mes <= 12:
            raise ValueError(f"mes must be between 1 and 12, got {self.mes}")

    def previous(self) -> "Period":
        """Return the prior period; January wraps to December of the prior year."""
        if self.mes == 1:
            return Period(mes=12, anio=self.anio - 1)
        return Period(mes=self.mes - 1, anio=self.anio)

    def __str__(self) -> str:
        return f"{self.anio}-{self.mes:02d}"
