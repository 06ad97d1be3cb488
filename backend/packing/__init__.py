"""Critical-point analysis of rigid packings of congruent disks."""

__version__ = "0.1.0"
