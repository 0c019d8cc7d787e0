"""errx command line."""
