"""
Command-line interface modules.

Provides CLI entry points for:
- derive_region: Summarise the postcode districts inside the model region
- build_dataset: Assemble the training dataset from source files
- train_model: Fit the ridge regression model
- predict: Estimate a price for a postcode
"""
