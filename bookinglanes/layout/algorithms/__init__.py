"""Overlap, adjacency, lane packing and geometry algorithms."""
