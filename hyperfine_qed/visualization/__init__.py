"""Optional plotting of sampled geometries and coupling scans."""
