# -*- coding: utf-8 -*-
# @file __init__.py
# @brief ORM base, request/response schemas and lookup seeds
# @author sailing-innocent
# @date 2025-04-21
