from .test_naca import *
from .test_section import *
from .test_loft import *
from .test_state import *
from .test_settings import *
from .test_plot import *
