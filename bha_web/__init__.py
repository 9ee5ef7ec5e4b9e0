# -*- coding: utf-8 -*-
# @file __init__.py
# @brief Server-rendered web client that proxies to the archive API
# @author sailing-innocent
# @date 2025-04-21
