# packages/pixpod/src/pixpod/config.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple

__all__ = ["CodecConfig"]


@dataclass(frozen=True, slots=True)
class CodecConfig:
    """
    Configuration **publique et stable** de pixpod.

    Consommée par `pixpod.bitmap` (orientation par défaut, pixel de fond)
    et `pixpod.records` (borne d'allocation des séquences).

    Champs
    ------
    origin_top_left : bool, default=True
        Orientation par défaut des BMP écrits. True => hauteur négative dans
        le header (lignes stockées de haut en bas).
    max_sequence_bytes : int, default=1 GiB
        Taille maximale de payload qu'un `read_sequence` accepte de matérialiser.
        Le format ne porte aucun contrôle d'intégrité sur le compteur : au-delà
        de cette borne on lève `AllocationError` avant toute allocation.
    blank_pixel : (r, g, b, a), default=(255, 255, 255, 255)
        Couleur de remplissage de `make_blank_grid`.

    Notes
    -----
    - Dataclass **immuable** : mêmes cfg => mêmes bytes.
    - Les validations lèvent une `ValueError` si les bornes sont violées.
    """

    origin_top_left: bool = True
    max_sequence_bytes: int = 1 << 30
    blank_pixel: Tuple[int, int, int, int] = (255, 255, 255, 255)

    def __post_init__(self) -> None:
        if int(self.max_sequence_bytes) <= 0:
            raise ValueError("CodecConfig.max_sequence_bytes must be > 0")
        if len(self.blank_pixel) != 4:
            raise ValueError("CodecConfig.blank_pixel must have 4 channels (r, g, b, a)")
        if not all(0 <= int(c) <= 255 for c in self.blank_pixel):
            raise ValueError("CodecConfig.blank_pixel channels must be in [0..255]")
