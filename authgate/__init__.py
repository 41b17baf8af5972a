"""AUTHGATE - route guarding and a combined login/registration flow."""
