"""Hierarchical binary-descriptor vocabulary for bag-of-words place recognition."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from os import PathLike
from typing import Iterable

import numpy as np

DESCRIPTOR_BYTES = 32

BowVector = dict
"""Mapping word id -> L1-normalized TF-IDF weight."""
FeatureVector = dict
"""Mapping vocabulary node id -> indices of the features that fall under it."""

_log = logging.getLogger(__name__)

_UNSIGNED = re.compile(r"\+?\d+")
_NODE_FIELDS = 2 + DESCRIPTOR_BYTES + 1


class VocabularyError(Exception):
    """Raised when a vocabulary file cannot be read or parsed."""

    IO = "io"
    PARSE = "parse"

    def __init__(self, kind: str, message: str) -> None:
        label = "I/O" if kind == self.IO else "parse"
        super().__init__(f"Vocabulary {label} error: {message}")
        self.kind = kind
        self.message = message


def _to_descriptor_bytes(descriptor) -> bytes:
    """Return exactly DESCRIPTOR_BYTES bytes: truncated, or zero-padded."""
    if isinstance(descriptor, (bytes, bytearray, memoryview)):
        raw = bytes(descriptor)
    else:
        raw = np.asarray(descriptor, dtype=np.uint8).ravel().tobytes()
    return raw[:DESCRIPTOR_BYTES].ljust(DESCRIPTOR_BYTES, b"\0")


def hamming_distance(a, b) -> int:
    """Number of differing bits over the first 32 bytes; missing bytes count as zero."""
    x = int.from_bytes(_to_descriptor_bytes(a), "big")
    y = int.from_bytes(_to_descriptor_bytes(b), "big")
    return (x ^ y).bit_count()


@dataclass
class VocabNode:
    """A node of the vocabulary tree; leaves are visual words."""

    id: int
    parent: int | None
    children: list[int] = field(default_factory=list)
    descriptor: bytes = bytes(DESCRIPTOR_BYTES)
    weight: float = 0.0
    word_id: int | None = None

    def is_leaf(self) -> bool:
        """True when the node has no children."""
        return not self.children


def _parse_unsigned(text: str, message: str) -> int:
    if not _UNSIGNED.fullmatch(text):
        raise VocabularyError(VocabularyError.PARSE, message)
    return int(text)


def _parse_float(text: str, message: str) -> float:
    if "_" in text:
        raise VocabularyError(VocabularyError.PARSE, message)
    try:
        return float(text)
    except ValueError:
        raise VocabularyError(VocabularyError.PARSE, message) from None


class OrbVocabulary:
    """Vocabulary tree quantizing binary descriptors to visual words."""

    def __init__(self, nodes: list[VocabNode], words: list[int], k: int, l: int) -> None:
        self._nodes = nodes
        self._words = words
        self._k = k
        self._l = l

    @property
    def nodes(self) -> list[VocabNode]:
        """All nodes; index 0 is the root."""
        return self._nodes

    @classmethod
    def load_from_text(cls, path: str | PathLike) -> "OrbVocabulary":
        """Load a vocabulary from the text format `k L ...` followed by one line per node."""
        try:
            handle = open(path, encoding="utf-8")
        except OSError as exc:
            raise VocabularyError(
                VocabularyError.IO, f"Failed to open vocabulary file: {exc}"
            ) from exc
        try:
            with handle:
                lines = handle.read().splitlines()
        except (OSError, UnicodeDecodeError) as exc:
            raise VocabularyError(VocabularyError.IO, str(exc)) from exc

        if not lines:
            raise VocabularyError(VocabularyError.PARSE, "Empty vocabulary file")

        header = lines[0].split()
        if len(header) < 2:
            raise VocabularyError(
                VocabularyError.PARSE,
                "Invalid header format, expected: k L [scoring weighting]",
            )
        k = _parse_unsigned(header[0], "Invalid k value")
        l = _parse_unsigned(header[1], "Invalid L value")

        nodes = [VocabNode(0, None)]
        words: list[int] = []

        for line_no, line in enumerate(lines[1:], start=2):
            parts = line.split()
            if len(parts) < _NODE_FIELDS:
                continue

            parent_id = _parse_unsigned(parts[0], f"Invalid parent_id at line {line_no}")
            if parent_id > 0xFFFFFFFF:
                raise VocabularyError(
                    VocabularyError.PARSE, f"Invalid parent_id at line {line_no}"
                )
            is_leaf = parts[1] == "1"

            desc_values = []
            for token in parts[2 : 2 + DESCRIPTOR_BYTES]:
                value = _parse_unsigned(token, f"Invalid descriptor byte at line {line_no}")
                if value > 255:
                    raise VocabularyError(
                        VocabularyError.PARSE, f"Invalid descriptor byte at line {line_no}"
                    )
                desc_values.append(value)

            weight = _parse_float(
                parts[2 + DESCRIPTOR_BYTES], f"Invalid weight at line {line_no}"
            )

            node_id = len(nodes)
            node = VocabNode(node_id, parent_id, descriptor=bytes(desc_values), weight=weight)
            if is_leaf:
                node.word_id = len(words)
                words.append(node_id)
            if parent_id < len(nodes):
                nodes[parent_id].children.append(node_id)
            nodes.append(node)

        _log.info(
            "Loaded vocabulary: k=%d, L=%d, %d nodes, %d words", k, l, len(nodes), len(words)
        )
        return cls(nodes, words, k, l)

    def params(self) -> tuple[int, int]:
        """Branching factor and depth."""
        return self._k, self._l

    def num_words(self) -> int:
        """Number of visual words (leaf nodes)."""
        return len(self._words)

    def num_nodes(self) -> int:
        """Number of nodes, root included."""
        return len(self._nodes)

    def quantize(self, descriptor) -> tuple[int, int]:
        """Descend to the closest leaf; return (word id, leaf node id)."""
        desc = _to_descriptor_bytes(descriptor)
        node = self._nodes[0]
        while node.children:
            node = min(
                (self._nodes[child] for child in node.children),
                key=lambda child: hamming_distance(desc, child.descriptor),
            )
        word_id = node.word_id if node.word_id is not None else 0
        return word_id, node.id

    def _ancestor(self, node_id: int, levels_up: int) -> int:
        for _ in range(levels_up):
            parent = self._nodes[node_id].parent
            if parent is None:
                break
            node_id = parent
        return node_id

    def _rows(self, descriptors) -> Iterable[bytes]:
        for row in descriptors:
            yield _to_descriptor_bytes(row)

    @staticmethod
    def _normalize(bow: dict[int, float]) -> dict[int, float]:
        total = sum(bow.values())
        if total > 0.0:
            return {word: weight / total for word, weight in bow.items()}
        return bow

    def transform(
        self, descriptors, levels_up: int
    ) -> tuple[dict[int, float], dict[int, list[int]]]:
        """Bag-of-words vector and features grouped by their ancestor `levels_up` above the leaf."""
        bow: dict[int, float] = {}
        feat: dict[int, list[int]] = {}
        for index, desc in enumerate(self._rows(descriptors)):
            word_id, leaf_id = self.quantize(desc)
            bow[word_id] = bow.get(word_id, 0.0) + self._nodes[leaf_id].weight
            feat.setdefault(self._ancestor(leaf_id, levels_up), []).append(index)
        return self._normalize(bow), feat

    def transform_bow_only(self, descriptors) -> dict[int, float]:
        """Bag-of-words vector without the feature grouping."""
        bow: dict[int, float] = {}
        for desc in self._rows(descriptors):
            word_id, leaf_id = self.quantize(desc)
            bow[word_id] = bow.get(word_id, 0.0) + self._nodes[leaf_id].weight
        return self._normalize(bow)

    @staticmethod
    def score(v1: dict[int, float], v2: dict[int, float]) -> float:
        """L1 similarity 1 - 0.5 * ||v1 - v2||_1; 1 means identical."""
        diff = sum(abs(w1 - v2.get(word, 0.0)) for word, w1 in v1.items())
        diff += sum(abs(w2) for word, w2 in v2.items() if word not in v1)
        return 1.0 - 0.5 * diff