"""Vector, quaternion and matrix maths, matrix stacks, procedural texture tables, mipmaps and Tex3DS parsing for PICA200-style rendering."""

__version__ = "1.6.2"

__all__ = ["matrix", "mtxstack", "proctex", "quaternion", "tex3ds", "texture"]