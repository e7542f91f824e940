# Version information for Pali Reader
__version__ = "1.0.0"
__build_timestamp__ = "source"
__build_type__ = "source"
__description__ = "Web reader for Pali texts with dictionary lookup links"
