# Copyright The IETF Trust 2018-2026, All Rights Reserved
# -*- coding: utf-8 -*-
