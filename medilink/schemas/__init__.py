# Schemas package (re-export feature modules for stable imports)
from .schedule import *
from .appointments import *
from .registration import *
from .push import *
from .common import *
