"""Symbol-stream decoding, transport packets, DCS and EMWIN parsing for GOES LRIT/HRIT."""

__version__ = "0.1.0"