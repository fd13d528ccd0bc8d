#!/usr/bin/env python3

import aws_cdk as cdk

from hotel_back_office_stack import HotelBackOfficeStack

app = cdk.App()
HotelBackOfficeStack(
    app,
    "HotelBackOfficeStack",
)

app.synth()
