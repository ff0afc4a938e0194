from .image_generator import ImageGenerator

__all__ = ['ImageGenerator']
