"""Bundled CloudFormation templates"""
