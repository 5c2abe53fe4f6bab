__version__ = '0.3.0'
__author__ = 'ddc_brightness_control contributors'
