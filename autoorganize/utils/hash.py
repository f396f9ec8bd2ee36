"""Utilitaires de hachage pour les identifiants stables."""

import hashlib


def path_id(path: str) -> str:
    """
    Calcule un identifiant stable pour un chemin.

    Arguments :
        path: Chemin à identifier.

    Retourne :
        Chaîne hexadécimale MD5 du chemin.
    """
    # usedforsecurity=False for FIPS compliance (MD5 used as an id, not crypto)
    return hashlib.md5(str(path).encode('utf-8'), usedforsecurity=False).hexdigest()
