"""
Pulumi infrastructure-as-code for the hello endpoint.

This package defines AWS infrastructure including:
- Secrets Manager secret read by the function
- IAM execution role with a least-privilege inline policy
- Lambda function
- API Gateway REST API with an IAM-authorized GET /hello on stage dev

The graph subpackage declares these as typed nodes with explicit edges and
can validate, order, plan and apply them without Pulumi.
"""
