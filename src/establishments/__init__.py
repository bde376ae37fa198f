"""
Establishments

Storage and delivery of attractions, hotels and restaurants together with
their shared locations and images.
"""
