"""Field selection for JSON API responses.

The Gradio preview tool lives in `app.py`. This package contains pure functions that:
- parse `Attributes` / `Attributes-Excluded` field lists into field paths
- query lists of field paths (exact, ancestor, descendant, wildcard)
- filter a JSON response by inclusion, exclusion and EXPLICIT fields
- report listed fields that do not occur in a response
"""
