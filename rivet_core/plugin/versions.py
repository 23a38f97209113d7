"""Version parsing and ordering helpers used by the compatibility check."""

from __future__ import annotations

from typing import Any, List, Tuple

__all__ = [
    "compare_versions",
    "strip_build_metadata",
]

_STAGE_ORDER: dict[str, int] = {
    "dev": 0,
    "snapshot": 0,
    "nightly": 0,

    "a": 10,
    "alpha": 10,

    "b": 20,
    "beta": 20,

    "pre": 30,
    "preview": 30,

    "rc": 40,
    "candidate": 40,
}

# Rank of a segment without any pre-release qualifier.
_RELEASE_RANK = 1000


def strip_build_metadata(version: str) -> str:
    """Drop a leading ``v`` and any ``+build`` suffix, which never affect ordering."""

    value = (version or "").strip()
    if value[:1] in ("v", "V"):
        value = value[1:]
    return value.split("+", 1)[0]


def _split_segment_tokens(seg: str) -> Tuple[str, List[str]]:
    if "-" not in seg:
        return seg, []
    parts = [p for p in seg.split("-") if p != ""]
    if not parts:
        return seg, []
    return parts[0], parts[1:]


def _tokenize_text_and_int(s: str) -> List[Any]:
    out: List[Any] = []
    i = 0
    while i < len(s):
        j = i
        if s[i].isdigit():
            while j < len(s) and s[j].isdigit():
                j += 1
            out.append((0, int(s[i:j])))
        else:
            while j < len(s) and not s[j].isdigit():
                j += 1
            out.append((1, s[i:j].lower()))
        i = j
    return out


def _qualifier_rank(tokens: List[str]) -> Tuple[int, int]:
    if not tokens:
        return (_RELEASE_RANK, 0)

    flat: List[Any] = []
    for token in tokens:
        flat.extend(_tokenize_text_and_int(token))

    stage_rank = 50
    stage_num = 0
    seen_stage = False
    for typ, val in flat:
        if typ == 1 and val in _STAGE_ORDER and not seen_stage:
            stage_rank = _STAGE_ORDER[val]
            seen_stage = True
            continue
        if seen_stage and typ == 0:
            stage_num = val
            break
    return (stage_rank, stage_num)


def _cmp_tokens(a: List[Any], b: List[Any]) -> int:
    for i in range(max(len(a), len(b))):
        if i >= len(a):
            return -1
        if i >= len(b):
            return 1
        ta, va = a[i]
        tb, vb = b[i]
        if ta != tb:
            return 1 if ta < tb else -1
        if va == vb:
            continue
        return 1 if va > vb else -1
    return 0


def compare_versions(a: str, b: str) -> int:
    """Return -1, 0 or 1 as ``a`` sorts before, equal to or after ``b``.

    Missing trailing segments count as ``0`` so ``1.2`` equals ``1.2.0``.
    A ``-rc1`` style qualifier sorts before the plain release.
    """

    aa = strip_build_metadata(a)
    bb = strip_build_metadata(b)
    if aa == bb:
        return 0

    seg_a = [s for s in aa.split(".") if s != ""]
    seg_b = [s for s in bb.split(".") if s != ""]

    for i in range(max(len(seg_a), len(seg_b))):
        sa = seg_a[i] if i < len(seg_a) else "0"
        sb = seg_b[i] if i < len(seg_b) else "0"

        base_a, qual_a = _split_segment_tokens(sa)
        base_b, qual_b = _split_segment_tokens(sb)

        c = _cmp_tokens(_tokenize_text_and_int(base_a), _tokenize_text_and_int(base_b))
        if c != 0:
            return c

        stage_a = _qualifier_rank(qual_a)
        stage_b = _qualifier_rank(qual_b)
        if stage_a != stage_b:
            return 1 if stage_a > stage_b else -1

    return 0
