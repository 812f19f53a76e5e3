from .pandas import *
