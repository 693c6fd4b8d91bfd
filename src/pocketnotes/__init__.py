"""Keeps short text notes in a single JSON file in your home directory.

If you installed via ``pip``, run ``pocketnotes -h`` to get help.
Or, run ``python3 -m pocketnotes -h``.

To use the Python API, look at :class:`pocketnotes.api.Pocketnotes`
"""
