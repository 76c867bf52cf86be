"""ARFF dataset importer.

Reads the attribute-relation text format into a dense row-major feature
matrix, a label vector and per-feature statistics. Only two attribute
kinds are understood:

- ``@ATTRIBUTE <name> NUMERIC`` declares a feature column.
- ``@ATTRIBUTE <name> {a,b}`` declares the class column; labels are
  indexed in declaration order.

Statistics (min/max/mean) are accumulated while rows are read, so the
file is scanned exactly once.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from pathlib import Path

import numpy as np

from ..errors import MalformedInputError
from ..utils.logging import get_logger, json_log

log = get_logger(__name__)

READ_LINE_MAX = 5000
TOKEN_LENGTH_MAX = 35

KEYWORD_ATTRIBUTE = '@ATTRIBUTE'
KEYWORD_DATA = '@DATA'
KEYWORD_NUMERIC = 'NUMERIC'
COMMENT_PREFIX = '%'


@dataclass(frozen=True)
class FeatureDescriptor:
    """Name and aggregate statistics of one numeric column."""

    name: str
    min: float
    max: float
    mean: float

    @property
    def range(self) -> float:
        return self.max - self.min


@dataclass
class _FeatureAccumulator:
    name: str
    min: float = math.inf
    max: float = -math.inf
    total: float = 0.0

    def update(self, value: float) -> None:
        if value < self.min:
            self.min = value
        if value > self.max:
            self.max = value
        self.total += value

    def finalize(self, count: int) -> FeatureDescriptor:
        return FeatureDescriptor(
            name=self.name,
            min=self.min,
            max=self.max,
            # float summation can drift just outside the observed range
            mean=min(max(self.total / count, self.min), self.max),
        )


class ArffImporter:
    """Parse an ARFF file into numeric training buffers.

    Accessors raise ``RuntimeError`` until :meth:`read` has completed.
    """

    def __init__(self) -> None:
        self._path: Path | None = None
        self._class_vec: list[str] = []
        self._features: list[FeatureDescriptor] = []
        self._feature_buff: np.ndarray | None = None
        self._class_index: np.ndarray | None = None

    def read(self, file_name: str | Path) -> None:
        """Parse ``file_name`` and populate the importer's state."""
        path = Path(file_name)
        # (feature slot | None for the class column) per declared attribute
        columns: list[int | None] = []
        accumulators: list[_FeatureAccumulator] = []
        class_vec: list[str] = []
        class_lookup: dict[str, int] = {}
        class_declared = False
        in_data = False

        rows: list[list[float]] = []
        labels: list[int] = []

        with path.open('rb') as fh:
            for line_number, encoded in enumerate(fh, start=1):
                try:
                    raw = encoded.decode('utf-8').rstrip('\r\n')
                except UnicodeDecodeError as exc:
                    raise MalformedInputError(
                        f'invalid UTF-8: {exc.reason}',
                        path,
                        line_number,
                    ) from exc
                if len(raw) > READ_LINE_MAX:
                    raise MalformedInputError(
                        f'line exceeds {READ_LINE_MAX} characters',
                        path,
                        line_number,
                    )
                line = raw.strip()
                if not line or line.startswith(COMMENT_PREFIX):
                    continue

                if in_data:
                    row, label = self._parse_row(
                        line, columns, class_lookup, path, line_number
                    )
                    for acc, value in zip(accumulators, row):
                        acc.update(value)
                    rows.append(row)
                    labels.append(label)
                    continue

                parts = line.split()
                keyword = parts[0].upper()
                if keyword == KEYWORD_DATA:
                    if not class_declared:
                        raise MalformedInputError(
                            'no class attribute declared before @DATA',
                            path,
                            line_number,
                        )
                    in_data = True
                elif keyword == KEYWORD_ATTRIBUTE:
                    if len(parts) != 3:
                        raise MalformedInputError(
                            "expected '@ATTRIBUTE <name> <type>'",
                            path,
                            line_number,
                        )
                    name, type_token = parts[1], parts[2]
                    _check_token(name, path, line_number)
                    if type_token.upper() == KEYWORD_NUMERIC:
                        columns.append(len(accumulators))
                        accumulators.append(_FeatureAccumulator(name=name))
                    elif type_token.startswith('{') and type_token.endswith('}'):
                        if class_declared:
                            raise MalformedInputError(
                                f"second class attribute '{name}'",
                                path,
                                line_number,
                            )
                        class_vec = _parse_class_labels(type_token, path, line_number)
                        class_lookup = {label: idx for idx, label in enumerate(class_vec)}
                        class_declared = True
                        columns.append(None)
                    else:
                        raise MalformedInputError(
                            f"unrecognized attribute type '{type_token}'",
                            path,
                            line_number,
                        )
                # any other header line (e.g. @RELATION) is ignored

        if not in_data:
            raise MalformedInputError('missing @DATA section', path)
        if not rows:
            raise MalformedInputError('no data rows after @DATA', path)

        num_instances = len(rows)
        self._path = path
        self._class_vec = class_vec
        self._features = [acc.finalize(num_instances) for acc in accumulators]
        self._feature_buff = np.array(rows, dtype=np.float64).reshape(
            num_instances, len(accumulators)
        )
        self._class_index = np.array(labels, dtype=np.intp)

        log.info(
            json_log(
                'import.completed',
                component='io.arff',
                path=str(path),
                instances=num_instances,
                features=len(self._features),
                classes=list(class_vec),
            )
        )

    @staticmethod
    def _parse_row(
        line: str,
        columns: list[int | None],
        class_lookup: dict[str, int],
        path: Path,
        line_number: int,
    ) -> tuple[list[float], int]:
        tokens = line.split(',')
        if len(tokens) != len(columns):
            raise MalformedInputError(
                f'expected {len(columns)} values, found {len(tokens)}',
                path,
                line_number,
            )

        row: list[float] = []
        label = -1
        for token, slot in zip(tokens, columns):
            token = token.strip()
            _check_token(token, path, line_number)
            if slot is None:
                if token not in class_lookup:
                    raise MalformedInputError(
                        f"unknown class label '{token}'",
                        path,
                        line_number,
                    )
                label = class_lookup[token]
                continue
            try:
                value = float(token)
            except ValueError:
                raise MalformedInputError(
                    f"non-numeric value '{token}' in numeric column",
                    path,
                    line_number,
                ) from None
            if not math.isfinite(value):
                raise MalformedInputError(
                    f"non-finite value '{token}' in numeric column",
                    path,
                    line_number,
                )
            row.append(value)
        return row, label

    def _require_read(self) -> None:
        if self._feature_buff is None:
            raise RuntimeError('ArffImporter.read() has not completed')

    @property
    def path(self) -> Path | None:
        return self._path

    @property
    def num_instances(self) -> int:
        self._require_read()
        return int(self._feature_buff.shape[0])

    @property
    def features(self) -> list[FeatureDescriptor]:
        self._require_read()
        return list(self._features)

    @property
    def class_attr(self) -> list[str]:
        self._require_read()
        return list(self._class_vec)

    @property
    def feature_buff(self) -> np.ndarray:
        """Row-major ``(num_instances, num_features)`` matrix.

        This is the importer's own buffer; normalizing it in place is
        intended.
        """
        self._require_read()
        return self._feature_buff

    @property
    def feature_buff_trans(self) -> np.ndarray:
        """Transposed ``(num_features, num_instances)`` copy of the current buffer."""
        self._require_read()
        return np.ascontiguousarray(self._feature_buff.T)

    @property
    def class_index(self) -> np.ndarray:
        self._require_read()
        return self._class_index


def _check_token(token: str, path: Path, line_number: int) -> None:
    if len(token) > TOKEN_LENGTH_MAX:
        raise MalformedInputError(
            f'token exceeds {TOKEN_LENGTH_MAX} characters',
            path,
            line_number,
        )


def _parse_class_labels(type_token: str, path: Path, line_number: int) -> list[str]:
    labels = [label.strip() for label in type_token[1:-1].split(',')]
    if any(not label for label in labels):
        raise MalformedInputError(
            f"empty class label in '{type_token}'",
            path,
            line_number,
        )
    if len(set(labels)) != len(labels):
        raise MalformedInputError(
            f"duplicate class label in '{type_token}'",
            path,
            line_number,
        )
    for label in labels:
        _check_token(label, path, line_number)
    return labels


def read_arff(path: str | Path) -> ArffImporter:
    """Convenience wrapper returning a populated importer."""
    importer = ArffImporter()
    importer.read(path)
    return importer
