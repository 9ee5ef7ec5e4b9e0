# -*- coding: utf-8 -*-
# @file __init__.py
# @brief BHA archive API server package
# @author sailing-innocent
# @date 2025-04-21

__version__ = "0.1.0"
