"""
Livestock Vaccination Domain

Schedule generation, the vaccination status state machine, reminder
computation and bulk scheduling over a farm -> group -> animal hierarchy.
"""
