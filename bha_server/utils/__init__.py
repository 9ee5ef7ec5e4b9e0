# -*- coding: utf-8 -*-
# @file __init__.py
# @brief Parameter parsing and content helpers
# @author sailing-innocent
# @date 2025-04-21
