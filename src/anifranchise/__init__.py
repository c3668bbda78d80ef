# SPDX-FileCopyrightText: 2025-present DouglasMacKrell <d.mackrell@gmail.com>
#
# SPDX-License-Identifier: MIT

"""anifranchise - Group an AniList user's completed anime into franchises."""

from anifranchise.__about__ import __version__

__all__ = ["__version__"]
