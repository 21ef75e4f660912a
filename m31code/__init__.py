"""
m31code — model selection and request mediation for an editor assistant.
"""

__version__ = "0.1.0"
