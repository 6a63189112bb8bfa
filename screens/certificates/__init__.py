"""
Certificates screen: certificate records plus locally rendered PNG downloads.
"""
