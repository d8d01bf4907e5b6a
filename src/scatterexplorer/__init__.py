"""Interactive scatter-plot explorer with trend line and correlation statistics."""
