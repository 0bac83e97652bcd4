from .config import IntegralConfig
from .pixel_access import PixelAccessor, PixelEncoding, resolve_accessor
from .channel_writer import ChannelIntegralWriter
from .computer import IntegralImageComputer, load_image, split_channels

__all__ = ['IntegralConfig', 'PixelAccessor', 'PixelEncoding', 'resolve_accessor',
           'ChannelIntegralWriter', 'IntegralImageComputer', 'load_image', 'split_channels']
