"""
Users screen: account records with inline candidate and ID-proof photos.
"""
