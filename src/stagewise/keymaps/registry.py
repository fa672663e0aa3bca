"""Keymap registry holding one binding table per mode."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator

from stagewise.runtime.telemetry import record_event, span

from .models import Action, Binding, BindingTable
from .resolver import ChordResolver


@dataclass(slots=True)
class RegistryStats:
    """Lightweight snapshot describing registry state."""

    binding_count: int
    modes: tuple[str, ...]
    longest_chord: int


@dataclass(frozen=True, slots=True)
class ShadowedBinding:
    """A binding that can never fire because an earlier one wins first."""

    binding: Binding
    shadowed_by: Binding


class KeymapRegistry:
    """Owns the binding tables for every mode."""

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._tables: Dict[str, BindingTable] = {}
        self._logger_name = logger_name

    def table(self, mode: str) -> BindingTable:
        return self._tables.setdefault(mode, BindingTable(mode=mode))

    def load(self, mode: str, specs: Iterable[tuple[str, Action]]) -> BindingTable:
        """Append bindings to ``mode``'s table.

        Loading the same specs twice leaves duplicates behind; the earlier
        copy keeps winning, so behavior does not change but the table grows.
        """

        with span(
            "keymaps::load",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"mode": mode},
        ) as handle:
            table = self.table(mode)
            table.load(specs)
            handle.add_metadata("binding_count", len(table))
            handle.add_metadata("longest_chord", table.longest_chord)
            for shadowed in self.detect_shadowed(mode):
                record_event(
                    "keymaps.shadowed",
                    level="warning",
                    logger_name=self._logger_name,
                    data={
                        "mode": mode,
                        "chord": shadowed.binding.spec,
                        "shadowed_by": shadowed.shadowed_by.spec,
                    },
                )
            return table

    def resolver(self, mode: str) -> ChordResolver:
        return ChordResolver(self.table(mode), logger_name=self._logger_name)

    def iter_bindings(self, mode: str | None = None) -> Iterator[Binding]:
        if mode is not None:
            yield from self._tables.get(mode, BindingTable(mode=mode))
            return
        for table in self._tables.values():
            yield from table

    def detect_shadowed(self, mode: str) -> list[ShadowedBinding]:
        """List bindings that an earlier chord (equal or a prefix) pre-empts."""

        shadowed: list[ShadowedBinding] = []
        seen: list[Binding] = []
        for binding in self.table(mode):
            for earlier in seen:
                if binding.chord.startswith(earlier.chord):
                    shadowed.append(ShadowedBinding(binding, earlier))
                    break
            seen.append(binding)
        return shadowed

    def modes(self) -> tuple[str, ...]:
        return tuple(self._tables)

    def stats(self) -> RegistryStats:
        return RegistryStats(
            binding_count=sum(len(table) for table in self._tables.values()),
            modes=tuple(sorted(self.modes())),
            longest_chord=max(
                (table.longest_chord for table in self._tables.values()), default=0
            ),
        )


__all__ = [
    "KeymapRegistry",
    "RegistryStats",
    "ShadowedBinding",
]
