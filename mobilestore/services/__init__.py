"""
Use cases built on top of the device repository.

The device list service holds the logic of the device screen
(save this device, list saved devices, clear them) without any rendering.
"""
