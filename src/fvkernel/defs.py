"""Compile-time layout constants for the kernel.

Import from here instead of defining local constants.
"""

import numpy as np

# Precision
Real = np.float64

# Spatial dimension of the problem (x3 is reserved, not wired)
DIMENSION = 2

# Number of ghost zones surrounding the active domain
NGHOST = 3

# Number of hydrodynamic variables
NHYDRO = 5

# Direction constants
X1DIR = 0
X2DIR = 1
X3DIR = 2

# Variable indices (density, velocity x/y/z, pressure)
IDN = 0
IVX = 1
IVY = 2
IVZ = 3
IPR = 4

# Face-flux system solved by the Riemann solvers (depth = density)
SYSTEM = "shallow_water"
