"""Grid, interval and normalization primitives plus the render-pass engine."""
