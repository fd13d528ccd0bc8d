from .identity import Identity as Identity
