import os

import matplotlib
from hypothesis import Verbosity, settings

matplotlib.use("Agg")

settings.register_profile("fast", max_examples=25, deadline=None)
settings.register_profile("thorough", max_examples=500)
settings.register_profile("debug", max_examples=10, verbosity=Verbosity.verbose)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "fast"))
