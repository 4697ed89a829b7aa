from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable

# Words that end in a period without ending the sentence. Stored lower case,
# without the final period.
DEFAULT_ABBREVIATIONS: frozenset[str] = frozenset(
    {
        "e.g", "i.e", "cf", "vs", "viz", "al", "approx", "resp",
        "fig", "figs", "eq", "eqs", "sec", "secs", "tab", "ref", "refs",
        "ch", "app", "alg", "thm", "lem", "def", "vol", "pp",
        "dr", "mr", "mrs", "ms", "prof", "dept",
    }
)


@dataclass(frozen=True, slots=True)
class SegmenterConfig:
    abbreviations: frozenset[str] = DEFAULT_ABBREVIATIONS
    strip_comments: bool = True

    def validate(self) -> None:
        if not isinstance(self.strip_comments, bool):
            raise ValueError("SegmenterConfig.strip_comments must be a boolean.")

        for abbr in self.abbreviations:
            if not isinstance(abbr, str) or not abbr.strip():
                raise ValueError("SegmenterConfig.abbreviations must only contain non-empty strings.")
            if abbr != abbr.lower() or abbr.endswith("."):
                raise ValueError(
                    f"SegmenterConfig.abbreviations entries must be lower case without a final period, got {abbr!r}"
                )

    def with_abbreviations(self, extra: Iterable[str]) -> "SegmenterConfig":
        cfg = SegmenterConfig(
            abbreviations=self.abbreviations | SegmenterConfig._norm_abbreviations(extra),
            strip_comments=self.strip_comments,
        )
        cfg.validate()
        return cfg

    @staticmethod
    def from_strings(
        abbreviations: str | Iterable[str] | None = None,
        strip_comments: bool | str = True,
    ) -> "SegmenterConfig":
        def _to_bool(v: bool | str) -> bool:
            if isinstance(v, bool):
                return v
            if isinstance(v, str):
                s = v.strip().lower()
                if s in {"1", "true", "t", "yes", "y", "on"}:
                    return True
                if s in {"0", "false", "f", "no", "n", "off"}:
                    return False
            raise ValueError(f"Expected a boolean or boolean-string, got {v!r}")

        if abbreviations is None:
            table = DEFAULT_ABBREVIATIONS
        else:
            if isinstance(abbreviations, str):
                abbreviations = abbreviations.split(",")
            table = SegmenterConfig._norm_abbreviations(abbreviations)

        cfg = SegmenterConfig(
            abbreviations=table,
            strip_comments=_to_bool(strip_comments),
        )
        cfg.validate()
        return cfg

    @staticmethod
    def _norm_abbreviations(values: Iterable[str]) -> frozenset[str]:
        # "e.g." and "E.g" both become "e.g"
        return frozenset(v.strip().lower().rstrip(".") for v in values if v and v.strip().rstrip("."))
