# -*- coding: utf-8 -*-

__title__ = "loglet"
__description__ = "Leveled console/file logging facade with log file rotation and hierarchical events."
__url__ = "https://github.com/kaydxh/loglet"
__version__ = "0.1.0"
__author__ = "kaydxh"
__author_email__ = "kaydxh@gmail.com"
__license__ = "MIT"
