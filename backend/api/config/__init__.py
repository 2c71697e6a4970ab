# API configuration
