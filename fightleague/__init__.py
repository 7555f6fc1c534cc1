"""League season scheduling for the fight statistics site."""
