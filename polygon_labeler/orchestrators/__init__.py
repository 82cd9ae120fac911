"""File-level orchestration.

Routes one uploaded file to the right extractor by extension and turns
an empty result into ``NoValidContentError``.
"""
