#!/usr/bin/env python3
import os
import sys
import unittest

top = os.path.dirname(os.path.abspath(__file__))
suite = unittest.TestLoader().discover(os.path.join(top, "xcbundler"),
                                       pattern="*_test.py",
                                       top_level_dir=top)
result = unittest.TextTestRunner(verbosity=2).run(suite)
sys.exit(0 if result.wasSuccessful() else 1)
