"""Operator algebra, Green's tensor and sampling routines."""
