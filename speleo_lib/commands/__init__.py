# -*- coding: utf-8 -*-
"""Command line tools registered under the ``speleo_lib.actions`` group."""
