"""mint-admin - deploy and reconcile the mint admin CloudFormation stack"""

__version__ = "1.0.0"
