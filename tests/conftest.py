import os
import sys

# modules live flat under FANO/, imported by bare name
sys.path.insert(0, os.path.join(os.path.dirname(os.path.abspath(__file__)), "..", "FANO"))
