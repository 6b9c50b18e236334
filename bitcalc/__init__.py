#
# Bit-exact integer, fixed-point and floating point formats for a programmer's calculator
#

from .bits import *
from .common import Category, BitCategory, BASES
from .errors import *
from .fixed import *
from .floating import *
from .formats import *
from .integer import *
from .ops import *

__version__ = '1.0.0'

__all__ = (bits.__all__ + errors.__all__ + fixed.__all__ + floating.__all__ +
           formats.__all__ + integer.__all__ + ops.__all__ +
           ('Category', 'BitCategory', 'BASES'))
