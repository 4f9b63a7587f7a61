"""
Test suite for lovememories application.

This module contains all test cases for the application:
- Unit tests for services, models, the API and the Streamlit UI
- Integration tests for the PIN flow against the API
"""
