import os
from scipy.constants import kilo

def create_directory_if_not_exists(directory):
    """
    Checks if a directory exists and creates it if it doesn't.

    Attributes
    ----------
    directory : str
        The path to the directory to check.
    """

    if not os.path.exists(directory):
        os.makedirs(directory)

def mm_to_m(value):
    return value / kilo

def m_to_mm(value):
    return value * kilo
