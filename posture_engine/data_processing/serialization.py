"""
JSON Serialization

Encodes landmark sets and metrics objects to JSON text and back. Schema keys
are the snake_case dataclass field names; absent optional fields (z,
visibility, body_deviation_deg) are omitted on encode and come back as None.

Decoding never raises: None, blank or malformed input yields None and a
warning, and landmarks with unknown point names are skipped.
"""

import json
import logging
from typing import Any, Callable, Optional, TypeVar

from ..landmarks.landmark_set import LandmarkSet
from ..metrics.metrics_dataclasses import FrontMetrics, RightMetrics

logger = logging.getLogger(__name__)

T = TypeVar('T')


def _encode(obj) -> str:
    return json.dumps(obj.to_dict(), ensure_ascii=False)


def _decode(text: Optional[str], factory: Callable[[Any], T], kind: str) -> Optional[T]:
    if text is None or not str(text).strip():
        return None
    try:
        data = json.loads(text)
        if not isinstance(data, dict):
            raise TypeError(f"expected a JSON object, got {type(data).__name__}")
        return factory(data)
    except (ValueError, KeyError, TypeError, IndexError, AttributeError) as e:
        logger.warning(f"[SERIALIZATION] Could not decode {kind}: {e}")
        return None


def encode_landmark_set(landmark_set: LandmarkSet) -> str:
    return _encode(landmark_set)


def decode_landmark_set(text: Optional[str]) -> Optional[LandmarkSet]:
    return _decode(text, LandmarkSet.from_dict, "landmark set")


def encode_front_metrics(metrics: FrontMetrics) -> str:
    return _encode(metrics)


def decode_front_metrics(text: Optional[str]) -> Optional[FrontMetrics]:
    return _decode(text, FrontMetrics.from_dict, "front metrics")


def encode_right_metrics(metrics: RightMetrics) -> str:
    return _encode(metrics)


def decode_right_metrics(text: Optional[str]) -> Optional[RightMetrics]:
    return _decode(text, RightMetrics.from_dict, "right metrics")
